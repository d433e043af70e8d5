"""Static reference content for the companion."""
