"""internalize - spaced repetition scheduling engine."""
