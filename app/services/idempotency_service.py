import json
from functools import wraps

import redis
from flask import request, jsonify

from app.extensions import redis_client
from app.utils.logger import get_logger

logger = get_logger(__name__)


class IdempotencyService:
    """Replay responses for repeated Idempotency-Key headers using Redis"""

    DEFAULT_TTL = 86400  # 24 hours

    @staticmethod
    def get_key(idempotency_key: str) -> str:
        """Generate Redis key for idempotency"""
        return f'idempotency:{idempotency_key}'

    @staticmethod
    def get_cached_response(idempotency_key: str):
        """Get cached response for idempotency key"""
        key = IdempotencyService.get_key(idempotency_key)
        cached = redis_client.get(key)

        if cached:
            return json.loads(cached)
        return None

    @staticmethod
    def cache_response(idempotency_key: str, response_data: dict, ttl: int = DEFAULT_TTL):
        """Cache response for future idempotent requests"""
        key = IdempotencyService.get_key(idempotency_key)
        redis_client.set(key, json.dumps(response_data), ex=ttl)


def idempotent(ttl: int = IdempotencyService.DEFAULT_TTL):
    """
    Decorator to make endpoints idempotent

    Only requests carrying an Idempotency-Key header are cached. Server
    errors and upstream failures are not cached so the client can retry.
    When Redis is unavailable the request is processed without the cache.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            idempotency_key = request.headers.get('Idempotency-Key')

            if not idempotency_key:
                return f(*args, **kwargs)

            try:
                cached = IdempotencyService.get_cached_response(idempotency_key)
            except redis.RedisError as e:
                logger.warning('Idempotency cache unavailable, processing %s uncached: %s', idempotency_key, e)
                return f(*args, **kwargs)

            if cached:
                status_code = cached.pop('_status_code', 200)
                return jsonify(cached), status_code

            result = f(*args, **kwargs)

            if isinstance(result, tuple):
                response_data, status_code = result
                if hasattr(response_data, 'get_json'):
                    response_json = dict(response_data.get_json())
                else:
                    response_json = dict(response_data)

                if status_code < 500:
                    response_json['_status_code'] = status_code
                    try:
                        IdempotencyService.cache_response(idempotency_key, response_json, ttl)
                    except redis.RedisError as e:
                        logger.warning('Could not cache response for %s: %s', idempotency_key, e)

            return result

        return decorated_function

    return decorator
