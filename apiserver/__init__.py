"""Lambda-facing API for survey submission and results."""
