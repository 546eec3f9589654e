"""VisitSwap backend: reciprocal site-visit exchange with a credit ledger."""
