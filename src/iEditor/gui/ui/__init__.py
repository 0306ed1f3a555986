"""Main window, widgets, controllers and worker tasks."""
