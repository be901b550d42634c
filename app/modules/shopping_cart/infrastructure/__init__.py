"""Shopping cart infrastructure layer."""
