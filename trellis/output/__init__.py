"""Output formatting for augmentation results and relationship graphs."""
