"""
Project: Digital Menu marketplace

Description:
Socket.IO broadcast of catalog and order changes for open dashboards.
"""

from flask_socketio import SocketIO

# Create SocketIO once (no app yet), then bind inside the factory
socketio = SocketIO()


def broadcast(event_type, **payload):
    socketio.emit("event", {"type": event_type, **payload})
