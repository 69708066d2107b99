# dependencies/__init__.py
