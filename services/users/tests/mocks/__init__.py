from .hasher import FakeHasher, AsyncHasherAdapter
from .traces import DummyTraceProvider, DummySpan, DummySpanContext
