"""Best-effort extraction of patent records and search summaries from HTML."""
