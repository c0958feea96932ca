"""
API package.

``router.py`` exposes a top-level ``router`` that includes every
endpoint module; ``main.create_app`` mounts it under ``/api``.
"""
