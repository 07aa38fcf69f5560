"""AWS access layer for ECS Pilot."""
