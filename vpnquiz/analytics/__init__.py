"""Quiz completion tracking and analytics."""
