"""
Blueprints Package - Modular application structure
Each blueprint handles a specific domain of functionality
"""

__all__ = ['visitors', 'portfolio', 'profiles', 'experiences', 'education', 'skills', 'certifications']
