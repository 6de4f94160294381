"""Shared user-records domain: models, validation, remote client and store."""
