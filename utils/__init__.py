# Shared helpers for the Sellora backend
