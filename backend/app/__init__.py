"""
EcoNews backend application
"""
