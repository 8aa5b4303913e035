"""HTTP surface for dashboard persistence jobs."""
