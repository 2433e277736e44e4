# petcare/api/__init__.py
"""HTTP-слой: FastAPI приложение, маршруты, обработка ошибок."""
