"""
Route suggestion engine.

Responsibilities:
- Decode raw routing-engine paths into candidates with neutral defaults.
- Derive distance, duration, climb and road-class metrics per candidate.
- Normalize metrics across the candidate set and compute composite scores.
- Explain each score in one sentence and return a ranked, capped list.
"""
