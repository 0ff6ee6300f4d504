"""Mock sign-in and the persisted current user."""
