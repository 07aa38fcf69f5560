"""Textual front end for the ECS Pilot shell."""
