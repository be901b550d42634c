"""Shopping cart domain layer."""
