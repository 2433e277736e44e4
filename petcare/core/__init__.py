# petcare/core/__init__.py
