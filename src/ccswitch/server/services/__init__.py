"""Service layer between the API routes and the repositories."""
