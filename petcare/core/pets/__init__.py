# petcare/core/pets/__init__.py
