"""Version 1 of the Event Registration API."""
