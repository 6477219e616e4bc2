"""
Infrastructure Package
======================

Abstraction layers for external dependencies.

Modules:
    - storage: File storage abstraction (S3/MinIO, local filesystem)
    - email: Email service abstraction (SMTP, mock)
    - observability: OpenTelemetry tracing setup
    - container: service locator wiring infrastructure into domain services
"""
