from .heartbeat import Heartbeat, HeartbeatFactory, HeartbeatReporter, default_heartbeat_factory

__all__ = ['Heartbeat', 'HeartbeatFactory', 'HeartbeatReporter', 'default_heartbeat_factory']
