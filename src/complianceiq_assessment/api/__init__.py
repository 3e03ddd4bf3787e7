"""HTTP surface for the assessment engine."""
