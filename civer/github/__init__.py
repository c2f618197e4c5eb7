"""GitHub Actions adapters: trigger context, release lookup and outputs."""
