"""
JSON-RPC batch client

Accumulates calls, sends them to the remote service as a single request or a
JSON-RPC batch, correlates replies back to their ResultSlot by id and
short-circuits cacheable calls through a CacheAdapter.

Typical use::

    client = Client(ClientConfig.from_yaml("jsonrpc.yaml"), HttpTransport())

    pong = client.select_service("billing").invoke("ping")

    client.begin_batch()
    user = client.invoke("user.get", {"id": 1})
    balance = client.with_cache(10).invoke("balance.get", {"id": 1})
    client.execute()
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional

from jsonrpc_client.cache.base import CacheAdapter, fingerprint
from jsonrpc_client.config import ClientConfig, ConnectionSettings
from jsonrpc_client.errors import ErrorCode, RpcError, TransportError
from jsonrpc_client.headers import HeaderSet
from jsonrpc_client.models import CallRecord, ResultSlot
from jsonrpc_client.telemetry.metrics import increment_counter, record_latency
from jsonrpc_client.telemetry.tracer import create_span, inject_trace_headers
from jsonrpc_client.transports.transport_interface import TransportInterface

logger = logging.getLogger(__name__)


class _Cycle:
    """Calls and result slots of one execution cycle"""

    def __init__(self, batch: bool):
        self.batch = batch
        self.records: Dict[str, CallRecord] = {}
        self.slots: Dict[str, ResultSlot] = {}

    def add(self, record: CallRecord) -> ResultSlot:
        slot = ResultSlot(record.id)
        self.records[record.id] = record
        self.slots[record.id] = slot
        return slot

    def pending_slots(self) -> List[ResultSlot]:
        return [slot for slot in self.slots.values() if slot.pending]

    def fail_pending(self, error: Optional[RpcError]) -> None:
        for slot in self.pending_slots():
            slot.resolve(False, error=error)


class Client:
    """
    JSON-RPC 2.0 client coordinating single calls, batches and cached results.

    Not safe for concurrent use; give each thread its own instance.
    """

    def __init__(self,
                 config: ClientConfig,
                 transport: TransportInterface,
                 cache: Optional[CacheAdapter] = None):
        """
        Args:
            config: Client configuration, resolved once for the client's lifetime
            transport: Transport carrying payloads to the service
            cache: Cache adapter for calls marked with ``with_cache``
        """
        self.config = config
        self.transport = transport
        self.cache = cache

        self._service_name: Optional[str] = None
        self._connection_name: Optional[str] = None
        self._cache_ttl: Optional[int] = None
        self._headers = HeaderSet()
        self._cycle: Optional[_Cycle] = None

    @property
    def service_name(self) -> str:
        return self._service_name or self.config.default_service

    @property
    def connection_name(self) -> str:
        return self._connection_name or self.service_name

    @property
    def in_batch(self) -> bool:
        return self._cycle is not None and self._cycle.batch

    def select_service(self, name: str) -> "Client":
        """Bind subsequent calls to a named service"""
        self._service_name = name
        return self

    def select_connection(self, name: str) -> "Client":
        """Route subsequent cycles through another connection entry

        The service name used in payload routing and cache keys is unchanged.
        """
        self._connection_name = name
        return self

    def begin_batch(self) -> "Client":
        """Defer subsequent calls until ``execute`` and drop any prior cycle"""
        self._cycle = _Cycle(batch=True)
        return self

    def with_cache(self, minutes: Optional[int] = -1) -> "Client":
        """Mark the next call as cacheable

        Args:
            minutes: Time to live; negative means the cache adapter default
        """
        self._cache_ttl = -1 if minutes is None else minutes
        return self

    def set_header(self, name: str, value: Any) -> "Client":
        """Attach an outbound header

        Args:
            name: Header name; the first registration of a name wins
            value: Literal value, or a callable receiving the outbound payloads
        """
        if not self._headers.add(name, value):
            logger.debug(f"Header {name} already set, ignoring new value")
        return self

    def set_headers(self, headers: Dict[str, Any]) -> "Client":
        for name, value in headers.items():
            self.set_header(name, value)
        return self

    def invoke(self, method: str, params: Any = None) -> ResultSlot:
        """Issue a call

        Outside a batch the call is executed immediately and the returned slot is
        already resolved. Inside a batch it resolves once ``execute`` runs.
        """
        if not self.in_batch:
            self._cycle = _Cycle(batch=False)

        record = CallRecord(
            method=method,
            params=params,
            service_name=self.service_name,
            client_label=self.config.client_name,
            cache_ttl=self._cache_ttl,
        )
        slot = self._cycle.add(record)
        self._cache_ttl = None

        if not self._cycle.batch:
            self.execute()
        return slot

    def execute(self) -> None:
        """Run every accumulated call and resolve their slots

        Does nothing when no calls are accumulated. Failures are reported through
        the slots, never raised.
        """
        cycle = self._cycle
        if cycle is None or not cycle.records:
            return

        try:
            with create_span("jsonrpc.execute", {
                "rpc.system": "jsonrpc",
                "rpc.service": self.service_name,
                "rpc.jsonrpc.batch": cycle.batch,
                "rpc.jsonrpc.calls": len(cycle.records),
            }):
                self._run(cycle)
        finally:
            self._cache_ttl = None
            self._cycle = None

    def _run(self, cycle: _Cycle) -> None:
        service_name = self.service_name
        connection_name = self.connection_name
        settings = self.config.get_connection_settings(connection_name)

        if settings.host is None:
            logger.error(f'No settings for the connection "{connection_name}"')
            increment_counter("rpc.client.errors", 1, {"type": "configuration", "service": service_name})
            cycle.fail_pending(RpcError(code=None, message=f'No settings for the connection "{connection_name}"'))
            return

        outbound = self._resolve_from_cache(cycle)
        if not outbound:
            return

        payloads = [record.to_payload() for record in outbound]
        payload = payloads[0] if len(payloads) == 1 and not cycle.batch else payloads
        try:
            headers = self._build_headers(settings).render(payloads)
        except Exception as e:
            logger.error(f"Cannot build headers for {service_name}: {e}. {self._log_info(payloads, None)}")
            increment_counter("rpc.client.errors", 1, {"type": "headers", "service": service_name})
            cycle.fail_pending(RpcError(code=None, message=f"Cannot build request headers: {e}"))
            return

        increment_counter("rpc.client.requests", len(payloads), {"service": service_name})
        start_time = time.time()
        try:
            response = self.transport.send(service_name, settings, payload, headers)
        except TransportError as e:
            logger.error(f"JsonRpc call error ({service_name}): {e}. {self._log_info(payloads, None)}")
            increment_counter("rpc.client.errors", 1, {"type": "transport", "service": service_name})
            cycle.fail_pending(RpcError(code=None, message=str(e)))
            return
        finally:
            record_latency("rpc.client.latency", (time.time() - start_time) * 1000, {"service": service_name})

        if isinstance(response, list):
            replies = response
        elif isinstance(response, dict):
            replies = [response]
        else:
            logger.error(f"Error parsing response from {connection_name}. {self._log_info(payloads, response)}")
            increment_counter("rpc.client.errors", 1, {"type": "protocol", "service": service_name})
            cycle.fail_pending(RpcError.from_code(ErrorCode.PARSE_ERROR))
            return

        outbound_ids = [record.id for record in outbound]
        for reply in replies:
            if not self._apply_reply(cycle, outbound_ids, reply):
                logger.error(f"JsonRpc error ({connection_name}). {self._log_info(payloads, response)}")

        unanswered = [call_id for call_id in outbound_ids if cycle.slots[call_id].pending]
        if unanswered:
            logger.error(f"No reply from {connection_name} for calls: {', '.join(unanswered)}")
            for call_id in unanswered:
                cycle.slots[call_id].resolve(False, error=RpcError(code=None, message="No reply received"))

    def _resolve_from_cache(self, cycle: _Cycle) -> List[CallRecord]:
        """Resolve cached calls locally and return the ones that must be sent"""
        outbound = []
        for record in cycle.records.values():
            if not cycle.slots[record.id].pending:
                continue
            if record.wants_cache and self.cache is not None:
                cached = self.cache.lookup(fingerprint(record))
                if cached is not None:
                    logger.debug(f"Cache hit for {record.service_name}.{record.method}")
                    increment_counter("rpc.client.cache_hits", 1, {"method": record.method})
                    cycle.slots[record.id].resolve_from_cache(cached)
                    continue
            outbound.append(record)
        return outbound

    def _build_headers(self, settings: ConnectionSettings) -> HeaderSet:
        headers = self._headers.copy()
        headers.add("Content-Type", "application/json")
        if settings.auth_header is not None and settings.key is not None:
            headers.add(settings.auth_header, settings.key)
        headers.update(settings.additional_headers)
        if self.config.propagate_trace_context:
            headers.update(inject_trace_headers())
        return headers

    def _apply_reply(self, cycle: _Cycle, outbound_ids: List[str], reply: Any) -> bool:
        """Resolve the slot a reply belongs to

        Returns:
            bool: False when the reply carried an error or could not be matched
        """
        if not isinstance(reply, dict):
            logger.error(f"Malformed reply entry: {reply!r}")
            increment_counter("rpc.client.errors", 1, {"type": "protocol"})
            return False

        call_id = reply.get("id")
        if call_id is None:
            if len(outbound_ids) != 1:
                logger.error(f"Reply without id while {len(outbound_ids)} calls were outstanding, dropped")
                increment_counter("rpc.client.errors", 1, {"type": "correlation"})
                return False
            # A single outstanding call owns an anonymous reply
            call_id = outbound_ids[0]

        if not isinstance(call_id, (str, int)) or isinstance(call_id, bool):
            logger.error(f"Reply id {call_id!r} is not a valid correlation id, dropped")
            increment_counter("rpc.client.errors", 1, {"type": "correlation"})
            return False

        record = cycle.records.get(call_id)
        slot = cycle.slots.get(call_id)
        if record is None or slot is None:
            logger.error(f"Reply id {call_id!r} does not match any call, dropped")
            increment_counter("rpc.client.errors", 1, {"type": "correlation"})
            return False
        if not slot.pending:
            logger.error(f"Duplicate reply for call {call_id}, dropped")
            increment_counter("rpc.client.errors", 1, {"type": "correlation"})
            return False

        if reply.get("error"):
            error = RpcError.from_payload(reply["error"])
            slot.resolve(False, error=error)
            increment_counter("rpc.client.errors", 1, {
                "type": "rpc_error",
                "method": record.method,
                "code": str(error.code),
            })
            return False

        slot.resolve(True, data=reply.get("result"))
        increment_counter("rpc.client.success", 1, {"method": record.method})

        if record.wants_cache and self.cache is not None:
            self.cache.store(fingerprint(record), record.cache_ttl, slot.as_cached())
        return True

    @staticmethod
    def _log_info(payloads: List[Dict[str, Any]], response: Any) -> str:
        return f"Request: {json.dumps(payloads, default=str)}. Response: {json.dumps(response, default=str)}"
