"""
Generative Text Client

Thin async wrapper around Gemini (via LangChain) exposing a single
``generate(prompt) -> str`` call. Transient failures are retried with
exponential backoff, and one deadline covers every attempt of a call.

Usage:
    from services.ai.llm_client import GeminiTextClient
    
    client = GeminiTextClient()
    text = await client.generate("Reply with a JSON object ...")
"""

import asyncio
import time
from typing import Optional, Protocol

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import settings
from config.constants import (
    LLM_MAX_RETRIES,
    LLM_RETRY_BASE_DELAY,
    LLM_RETRY_MAX_DELAY,
    LLM_RETRYABLE_MARKERS,
)
from utils.logging import get_logger, log_api_call
from utils.exceptions import AIServiceError, GenerationTimeout

logger = get_logger(__name__)


class TextGenerator(Protocol):
    """Anything that can complete a prompt. Agents depend only on this."""

    async def generate(self, prompt: str) -> str:
        ...


class GeminiTextClient:
    """
    Prompt-completion client backed by ChatGoogleGenerativeAI.
    
    The client is safe to construct without an API key; generation calls
    then fail with AIServiceError, which agents turn into a retry prompt.
    
    Attributes:
        model: Gemini model name
        timeout: Deadline in seconds for one generation attempt
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout if timeout is not None else settings.GENERATION_TIMEOUT_SECONDS
        self._chain = None
        
        if not self.api_key:
            logger.warning("GOOGLE_API_KEY not configured - generation calls will fail")
            return
        
        llm = ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=self.api_key,
            temperature=temperature if temperature is not None else settings.GENERATION_TEMPERATURE,
        )
        self._chain = (
            ChatPromptTemplate.from_messages([("human", "{prompt}")])
            | llm
            | StrOutputParser()
        )
        logger.info(f"GeminiTextClient initialized with model: {self.model}")
    
    @property
    def is_configured(self) -> bool:
        return self._chain is not None
    
    async def generate(self, prompt: str) -> str:
        """
        Complete a prompt.
        
        Args:
            prompt: Full prompt text
            
        Returns:
            str: Raw completion text
            
        Raises:
            AIServiceError: If the client is unconfigured or all attempts fail
            GenerationTimeout: If attempts and backoff together exceed the deadline
        """
        if self._chain is None:
            raise AIServiceError(message="GOOGLE_API_KEY is not configured")
        
        started = time.perf_counter()
        try:
            text = await asyncio.wait_for(
                self._invoke_with_retry(prompt),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini call exceeded the {self.timeout:.0f}s deadline")
            log_api_call("Gemini", self.model, success=False,
                         duration_ms=(time.perf_counter() - started) * 1000,
                         error="deadline exceeded")
            raise GenerationTimeout(self.timeout) from e
        except Exception as e:
            log_api_call("Gemini", self.model, success=False,
                         duration_ms=(time.perf_counter() - started) * 1000, error=str(e))
            raise AIServiceError(message=f"Generation failed: {e}") from e
        
        log_api_call("Gemini", self.model, success=True,
                     duration_ms=(time.perf_counter() - started) * 1000)
        return text
    
    async def _invoke_with_retry(self, prompt: str) -> str:
        """
        Invoke the chain with exponential backoff retry.
        
        Runs under the single deadline set by generate(), which cancels any
        attempt or backoff sleep still pending when it expires.
        """
        delay = LLM_RETRY_BASE_DELAY
        
        for attempt in range(LLM_MAX_RETRIES):
            try:
                return await self._chain.ainvoke({"prompt": prompt})
            except Exception as e:
                error_str = str(e).lower()
                retryable = any(marker in error_str for marker in LLM_RETRYABLE_MARKERS)
                
                if not retryable or attempt == LLM_MAX_RETRIES - 1:
                    raise
                
                logger.warning(
                    f"Gemini call failed (attempt {attempt + 1}/{LLM_MAX_RETRIES}), "
                    f"retrying in {delay:.1f}s: {e}"
                )
                await asyncio.sleep(delay)
                delay = min(delay * 2, LLM_RETRY_MAX_DELAY)
        
        raise AIServiceError(message="Generation retries exhausted")
