# petcare/core/tariffs/__init__.py
