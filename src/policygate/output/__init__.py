"""Output layer — renders gateway Outcomes for humans (Rich) or machines (JSON)."""
