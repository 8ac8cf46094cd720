"""
Core modules: expression language, tree types, store, errors, and config.
"""
