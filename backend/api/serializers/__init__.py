"""
Response serializers and envelope helpers.
"""

from .response import assemble, error_envelope, search_error_envelope, success_envelope

__all__ = ['assemble', 'error_envelope', 'search_error_envelope', 'success_envelope']
