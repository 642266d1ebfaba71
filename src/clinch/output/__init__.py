"""Output layer — renders inspection results for humans or machines."""
