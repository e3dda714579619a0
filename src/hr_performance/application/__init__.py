"""Application workflows that compute scores and record facts."""
