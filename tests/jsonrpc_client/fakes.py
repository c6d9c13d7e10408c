"""
Test doubles for the client tests
"""
from jsonrpc_client.errors import TransportError
from jsonrpc_client.transports.transport_interface import TransportInterface


class RecordingTransport(TransportInterface):
    """Transport double that records every send and answers through a handler"""

    def __init__(self, handler=None):
        self.handler = handler or answer_with({})
        self.sent = []
        self.closed = False

    def send(self, service_name, settings, payload, headers):
        self.sent.append({
            "service_name": service_name,
            "settings": settings,
            "payload": payload,
            "headers": headers,
        })
        return self.handler(payload)

    def close(self):
        self.closed = True


def answer_with(methods):
    """Build a handler replying per method

    ``methods`` maps a method name to either a result value or a callable
    ``params -> reply fragment`` (a dict with "result" or "error").
    """
    def reply_to(request):
        answer = methods.get(request["method"])
        if callable(answer):
            fragment = answer(request["params"])
        else:
            fragment = {"result": answer}
        return {"jsonrpc": "2.0", "id": request["id"], **fragment}

    def handler(payload):
        if isinstance(payload, list):
            return [reply_to(request) for request in payload]
        return reply_to(payload)

    return handler


def failing(message="connection refused"):
    def handler(payload):
        raise TransportError(message)
    return handler

