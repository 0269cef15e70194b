"""
Security Module - Bearer-token authentication against the external identity provider

Admin writes carry `Authorization: Bearer <access token>` issued by the
identity provider. The token is checked by asking the provider who it
belongs to; nothing about the user is stored locally.
"""

import requests
from flask import request, current_app
from flask_login import UserMixin
from extensions import login_manager


class ProviderUser(UserMixin):
    """User resolved from a valid access token"""

    def __init__(self, user_id, email=None, claims=None):
        self.id = user_id
        self.email = email
        self.claims = claims or {}

    def __repr__(self):
        return f"<ProviderUser {self.id}>"


def get_client_ip():
    """Get real client IP address"""
    return request.environ.get('HTTP_X_FORWARDED_FOR',
                              request.environ.get('REMOTE_ADDR', 'unknown'))


def get_bearer_token(req=None):
    """Extract the token from an Authorization header, or None"""
    req = req or request
    auth_header = req.headers.get('Authorization', '')
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def verify_access_token(token):
    """Ask the identity provider for the token's user.

    Returns the provider's user dict, or None when the token is rejected
    or the provider cannot be reached.
    """
    base_url = current_app.config.get('AUTH_PROVIDER_URL')
    if not base_url:
        current_app.logger.error("AUTH_PROVIDER_URL is not configured; rejecting token")
        return None

    url = f"{base_url.rstrip('/')}/auth/v1/user"
    headers = {'Authorization': f'Bearer {token}'}
    api_key = current_app.config.get('AUTH_PROVIDER_API_KEY')
    if api_key:
        headers['apikey'] = api_key

    try:
        response = requests.get(
            url,
            headers=headers,
            timeout=current_app.config.get('AUTH_PROVIDER_TIMEOUT', 5)
        )
    except requests.RequestException as e:
        current_app.logger.error(f"Identity provider unreachable: {str(e)}")
        return None

    if response.status_code != 200:
        current_app.logger.warning(f"Identity provider rejected token (status {response.status_code})")
        return None

    try:
        user = response.json()
    except ValueError:
        current_app.logger.error("Identity provider returned a non-JSON body")
        return None

    if not isinstance(user, dict) or not user.get('id'):
        current_app.logger.warning("Identity provider response has no user id")
        return None
    return user


@login_manager.request_loader
def load_user_from_request(req):
    """Flask-Login hook: resolve current_user from the bearer token"""
    token = get_bearer_token(req)
    if not token:
        return None

    user = verify_access_token(token)
    if not user:
        return None
    return ProviderUser(user['id'], email=user.get('email'), claims=user)


__all__ = [
    'ProviderUser',
    'get_client_ip',
    'get_bearer_token',
    'verify_access_token',
    'load_user_from_request'
]
