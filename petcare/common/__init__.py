# petcare/common/__init__.py
