"""Core shared components for the ecovolunteer application."""
