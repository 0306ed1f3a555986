"""Image acquisition and export persistence collaborators."""
