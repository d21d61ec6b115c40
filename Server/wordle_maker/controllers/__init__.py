"""
HTTP Controllers Package

Flask blueprints for the puzzle creation and gameplay endpoints.
"""
