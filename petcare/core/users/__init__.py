# petcare/core/users/__init__.py
