"""Draft release promotion: store adapters, eligibility and sequencing."""
