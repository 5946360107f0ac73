# screens/parents/__init__.py
"""Parent portal: registration, dashboard and the child's exam analytics."""
