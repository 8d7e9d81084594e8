"""Services — imperative shell around the pure core (load → transition → save)."""
