"""
Base MQTT Publisher
===================

Bounded Context: MQTT Infrastructure

One paho-mqtt client bound to one topic. The network loop runs in
paho's background thread; ``publish`` may be called from any thread.

Subclasses turn their domain object into a dict (``format_message``);
this class owns the connection, JSON encoding and publish counters.
"""

import json
import threading
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

import paho.mqtt.client as mqtt

from ..logging import StructuredLogger, LogEvent


class BasePublisher(ABC):
    """
    Connection and publishing shared by topic publishers.

    Attributes:
        broker_host: MQTT broker hostname
        broker_port: MQTT broker port
        topic: Topic every message goes to
        qos: Publish QoS (0, 1 or 2)
        client: paho-mqtt client (callback API v2)
    """

    def __init__(
        self,
        broker_host: str,
        broker_port: int,
        topic: str,
        client_id: str,
        logger: StructuredLogger,
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic = topic
        self.qos = qos
        self.logger = logger

        self.client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
        )
        if username and password:
            self.client.username_pw_set(username, password)
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect

        self._connected = threading.Event()
        self._lock = threading.Lock()
        self._published = 0

    @property
    def broker(self) -> str:
        return f"{self.broker_host}:{self.broker_port}"

    def _on_connect(self, client, userdata, flags, reason_code, properties=None) -> None:
        if reason_code.is_failure:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message=f"Broker refused connection ({reason_code})",
                metadata={'broker': self.broker}
            )
            return
        self._connected.set()
        self.logger.info(
            event=LogEvent.MQTT_CONNECTED,
            message="Connected to MQTT broker",
            metadata={'broker': self.broker, 'topic': self.topic}
        )

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None) -> None:
        self._connected.clear()
        self.logger.warning(
            event=LogEvent.MQTT_DISCONNECTED,
            message="Disconnected from MQTT broker",
            metadata={'broker': self.broker, 'reason_code': str(reason_code)}
        )

    def connect(self, timeout: float = 10.0) -> bool:
        """
        Open the connection and start the network loop.

        Returns:
            True once the broker acknowledged within ``timeout`` seconds
        """
        try:
            self.client.connect(self.broker_host, self.broker_port)
        except (OSError, ValueError) as e:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="Failed to connect to broker",
                exc_info=e,
                metadata={'broker': self.broker}
            )
            return False

        self.client.loop_start()
        if not self._connected.wait(timeout=timeout):
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="Connection timeout",
                metadata={'broker': self.broker, 'timeout': timeout}
            )
            return False
        return True

    def disconnect(self) -> None:
        self.client.loop_stop()
        self.client.disconnect()
        self._connected.clear()

    def is_connected(self) -> bool:
        return self._connected.is_set()

    @abstractmethod
    def format_message(self, *args, **kwargs) -> Dict[str, Any]:
        """Build the JSON-serializable payload."""

    def publish(self, message_data: Dict[str, Any], retain: bool = False) -> bool:
        """
        Encode ``message_data`` as JSON and publish it to ``topic``.

        Returns:
            False when not connected, or when paho rejects or fails the publish
        """
        if not self._connected.is_set():
            self.logger.warning(
                event=LogEvent.MQTT_PUBLISH_FAILED,
                message="Cannot publish: not connected to broker",
                metadata={'topic': self.topic}
            )
            return False

        payload = json.dumps(message_data)
        try:
            info = self.client.publish(self.topic, payload, qos=self.qos, retain=retain)
        except ValueError as e:
            # Invalid topic or QoS
            self.logger.error(
                event=LogEvent.MQTT_PUBLISH_ERROR,
                message="Error publishing message",
                exc_info=e,
                metadata={'topic': self.topic}
            )
            return False

        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            self.logger.warning(
                event=LogEvent.MQTT_PUBLISH_FAILED,
                message=f"Publish failed ({mqtt.error_string(info.rc)})",
                metadata={'topic': self.topic}
            )
            return False

        with self._lock:
            self._published += 1

        self.logger.debug(
            event=LogEvent.MQTT_PUBLISH_SUCCESS,
            message="Published message",
            metadata={'topic': self.topic, 'bytes': len(payload), 'retain': retain}
        )
        return True

    def get_stats(self) -> Dict[str, Any]:
        """Publish counter and connection state."""
        with self._lock:
            published = self._published
        return {
            'message_count': published,
            'connected': self._connected.is_set(),
            'topic': self.topic,
            'broker': self.broker,
        }
