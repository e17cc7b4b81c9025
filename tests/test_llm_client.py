"""
Unit Tests for the Gemini Text Client

The LangChain chain is replaced by a fake so no network calls are made.
"""

import asyncio
import time
import pytest

from config.settings import settings
from services.ai import llm_client as llm_client_module
from services.ai.llm_client import GeminiTextClient
from utils.exceptions import AIServiceError, GenerationTimeout

# Chain latency must keep sleeping when the backoff sleep is patched out
_chain_sleep = asyncio.sleep


class FakeChain:
    """Stand-in for the prompt | llm | parser chain."""
    
    def __init__(self, outcomes, delay=0.0):
        self.outcomes = list(outcomes)
        self.delay = delay
        self.calls = []
    
    async def ainvoke(self, inputs):
        self.calls.append(inputs)
        if self.delay:
            await _chain_sleep(self.delay)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def unconfigured_client(monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_API_KEY", None)
    return GeminiTextClient(timeout=5.0)


@pytest.fixture
def no_backoff(monkeypatch):
    """Record backoff delays instead of sleeping."""
    delays = []
    
    async def fake_sleep(delay):
        delays.append(delay)
    
    monkeypatch.setattr(llm_client_module.asyncio, "sleep", fake_sleep)
    return delays


class TestConfiguration:
    
    def test_missing_key_leaves_client_unconfigured(self, unconfigured_client):
        assert not unconfigured_client.is_configured
    
    @pytest.mark.asyncio
    async def test_generate_without_key_raises(self, unconfigured_client):
        with pytest.raises(AIServiceError) as exc_info:
            await unconfigured_client.generate("hello")
        
        assert exc_info.value.status_code == 502


class TestGenerate:
    
    @pytest.mark.asyncio
    async def test_returns_completion_text(self, unconfigured_client):
        chain = FakeChain(['{"html": "", "css": "", "js": ""}'])
        unconfigured_client._chain = chain
        
        text = await unconfigured_client.generate("build it")
        
        assert text == '{"html": "", "css": "", "js": ""}'
        assert chain.calls == [{"prompt": "build it"}]
    
    @pytest.mark.asyncio
    async def test_deadline_raises_timeout_without_retry(self, unconfigured_client):
        chain = FakeChain(["too late", "too late"], delay=1.0)
        unconfigured_client._chain = chain
        unconfigured_client.timeout = 0.05
        
        with pytest.raises(GenerationTimeout) as exc_info:
            await unconfigured_client.generate("build it")
        
        assert exc_info.value.status_code == 504
        assert len(chain.calls) == 1
    
    @pytest.mark.asyncio
    async def test_transient_error_is_retried(self, unconfigured_client, no_backoff):
        chain = FakeChain([RuntimeError("429 Resource exhausted"), "ok"])
        unconfigured_client._chain = chain
        
        assert await unconfigured_client.generate("build it") == "ok"
        assert len(chain.calls) == 2
        assert no_backoff == [1.0]
    
    @pytest.mark.asyncio
    async def test_backoff_doubles_until_attempts_run_out(self, unconfigured_client, no_backoff):
        chain = FakeChain([RuntimeError("503 overloaded")] * 3)
        unconfigured_client._chain = chain
        
        with pytest.raises(AIServiceError):
            await unconfigured_client.generate("build it")
        
        assert len(chain.calls) == 3
        assert no_backoff == [1.0, 2.0]
    
    @pytest.mark.asyncio
    async def test_permanent_error_is_not_retried(self, unconfigured_client, no_backoff):
        chain = FakeChain([ValueError("API key not valid"), "ok"])
        unconfigured_client._chain = chain
        
        with pytest.raises(AIServiceError) as exc_info:
            await unconfigured_client.generate("build it")
        
        assert len(chain.calls) == 1
        assert no_backoff == []
        assert isinstance(exc_info.value.__cause__, ValueError)
    
    @pytest.mark.asyncio
    async def test_deadline_covers_all_retries(self, unconfigured_client, no_backoff):
        """Slow transient failures cannot stretch one call past its deadline."""
        chain = FakeChain([RuntimeError("503 unavailable")] * 3, delay=0.12)
        unconfigured_client._chain = chain
        unconfigured_client.timeout = 0.2
        
        started = time.perf_counter()
        with pytest.raises(GenerationTimeout):
            await unconfigured_client.generate("build it")
        elapsed = time.perf_counter() - started
        
        assert len(chain.calls) == 2
        assert elapsed < 0.2 * 1.5
    
    @pytest.mark.asyncio
    async def test_deadline_cancels_backoff_sleep(self, unconfigured_client):
        chain = FakeChain([RuntimeError("429 rate limit"), "ok"])
        unconfigured_client._chain = chain
        unconfigured_client.timeout = 0.1
        
        started = time.perf_counter()
        with pytest.raises(GenerationTimeout):
            await unconfigured_client.generate("build it")
        
        assert time.perf_counter() - started < 0.5
        assert len(chain.calls) == 1


class TestWorkerBudget:
    
    def test_worker_timeout_exceeds_longest_turn(self):
        """A worker must outlive a dataset fetch plus one full generation deadline."""
        import runpy
        from pathlib import Path
        from config.constants import WEB_FEATURES_FETCH_TIMEOUT
        
        conf = runpy.run_path(str(Path(__file__).resolve().parent.parent / "gunicorn.conf.py"))
        
        assert conf["timeout"] > settings.GENERATION_TIMEOUT_SECONDS + WEB_FEATURES_FETCH_TIMEOUT
