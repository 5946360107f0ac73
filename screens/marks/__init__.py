# screens/marks/__init__.py
"""
Exam marks for the staff portal: bulk mark entry and the results browser.
"""
