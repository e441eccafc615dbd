"""
Redis change feed for project subscribers

Front-ends keep their scene view live by subscribing to a project's
channel instead of polling. Every committed mutation publishes one event.

Channels:
- scenevault:project:{project_id} -> JSON events for that project
"""

from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional
from uuid import UUID
import json
import logging

from scenevault.config import settings
from scenevault.database import utcnow

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "scenevault:project:"


def channel_for(project_id: UUID) -> str:
    return f"{CHANNEL_PREFIX}{project_id}"


class ChangeFeed:
    """
    Publish/subscribe wrapper around Redis

    Degrades to a no-op when Redis is disabled or unreachable, so a
    missing Redis never blocks a mutation.
    """

    def __init__(self, redis_client=None, enabled: Optional[bool] = None, async_client=None):
        """
        Initialize Redis connections

        Publishing uses a sync client so services stay synchronous;
        subscribers get a redis.asyncio client so an idle stream never
        holds a worker thread.

        Args:
            redis_client: Pre-built sync client (tests); skips connecting
            enabled: Override settings.CHANGE_FEED_ENABLED
            async_client: Pre-built redis.asyncio client for subscribers
        """
        self.enabled = settings.CHANGE_FEED_ENABLED if enabled is None else enabled
        self.redis = redis_client
        self.async_redis = async_client

        if self.enabled and self.redis is None:
            try:
                import redis
                import redis.asyncio
                self.redis = redis.from_url(
                    settings.REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=5
                )
                self.redis.ping()
                self.async_redis = redis.asyncio.from_url(settings.REDIS_URL, decode_responses=True)
                logger.info(f"Change feed connected to Redis: {settings.REDIS_URL}")
            except Exception as e:
                logger.warning(f"Failed to connect to Redis: {e}. Change feed disabled.")
                self.redis = None
                self.async_redis = None
                self.enabled = False

    @property
    def available(self) -> bool:
        return self.enabled and self.redis is not None

    @property
    def can_stream(self) -> bool:
        return self.enabled and self.async_redis is not None

    def publish(
        self,
        event_type: str,
        project_id: UUID,
        record_id: UUID,
        actor_id: Optional[UUID] = None
    ) -> bool:
        """
        Publish one change event to the project's channel

        Args:
            event_type: e.g. "model.updated"
            project_id: Project the change belongs to
            record_id: Changed record
            actor_id: Caller who made the change

        Returns:
            True if published, False if the feed is unavailable or Redis failed
        """
        if not self.available:
            return False

        event = {
            "type": event_type,
            "project_id": str(project_id),
            "record_id": str(record_id),
            "actor_id": str(actor_id) if actor_id else None,
            "at": utcnow().isoformat(),
        }

        try:
            self.redis.publish(channel_for(project_id), json.dumps(event))
            logger.debug(f"Published {event_type} for project {project_id}")
            return True
        except Exception as e:
            logger.error(f"Error publishing {event_type} for project {project_id}: {e}")
            return False

    async def listen(
        self,
        project_id: UUID,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
        poll_interval: float = 1.0
    ) -> AsyncIterator[Dict[str, Any]]:
        """
        Yield events for a project until the subscriber goes away

        Polls with a timeout instead of blocking on the channel, so a
        client that disconnects while the project is idle is released
        within one poll interval.

        Args:
            project_id: Project to follow
            is_disconnected: Coroutine function reporting client disconnect
                (e.g. Request.is_disconnected)
            poll_interval: Seconds to wait for a message per pass

        Yields:
            Decoded event dicts
        """
        if not self.can_stream:
            return

        channel = channel_for(project_id)
        pubsub = self.async_redis.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(channel)
        try:
            while True:
                if is_disconnected is not None and await is_disconnected():
                    logger.debug(f"Subscriber left {channel}")
                    break

                message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=poll_interval)
                if message is None or message.get("type") != "message":
                    continue

                try:
                    yield json.loads(message["data"])
                except (TypeError, ValueError):
                    logger.warning(f"Dropping malformed change event on {channel}")
        finally:
            await pubsub.unsubscribe(channel)
            await pubsub.aclose()
