"""Services — IO-bound orchestration around the pure core (record stores, contact relay)."""
