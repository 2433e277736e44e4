# petcare/core/offerings/__init__.py
