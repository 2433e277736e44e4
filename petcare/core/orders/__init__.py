# petcare/core/orders/__init__.py
