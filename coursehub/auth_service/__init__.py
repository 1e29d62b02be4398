"""Account directory service: registration, login and current-user lookup."""
