"""Academy System package.

Back-office for a training academy, organized by feature modules (users,
batches, enrollments, payments, ...) with a thin Flask JSON controller layer
and service/repository layers underneath.
"""
