# screens/analytics/__init__.py
"""
Exam-performance analytics: class, subject, student and school views
plus the statistics dashboard. Chart data comes from the backend and is
only reshaped here (see formatters).
"""
