"""Channel adapter registry.

The fake email adapter is used unless another adapter is installed with
``set_channel``.
"""

from marketplace.notifications.channel.email_port import EmailPort

EMAIL = "Email"

_channel_instances: dict[str, EmailPort] = {}


def get_channel(channel_type: str = EMAIL) -> EmailPort:
    if channel_type not in _channel_instances:
        if channel_type != EMAIL:
            raise ValueError(f"Unknown channel type: {channel_type}")
        from marketplace.notifications.channel.fake_email import FakeEmailAdapter

        _channel_instances[channel_type] = FakeEmailAdapter()
    return _channel_instances[channel_type]


def set_channel(channel_type: str, adapter: EmailPort) -> None:
    _channel_instances[channel_type] = adapter


def reset_channels():
    """Drop all adapter singletons."""
    _channel_instances.clear()
