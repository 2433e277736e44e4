# petcare/shared/__init__.py
