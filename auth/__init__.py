"""
auth — credential registration and verification.

Provides:
  • Password hashing (bcrypt, configurable work factor)
  • ``CredentialService`` with ``register`` / ``verify``
  • Signup / Login API routes
"""
