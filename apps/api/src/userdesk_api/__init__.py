"""userdesk web app: HTML views and JSON API over the user store."""
