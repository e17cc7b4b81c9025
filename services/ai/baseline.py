"""
Baseline Capability Filter

Loads the web-features dataset once per process and keeps the names of CSS
properties that are Baseline (broadly supported). The code generation prompt
restricts styles to this set.

The cache has no invalidation: the dataset is static per deployment. If the
dataset cannot be loaded the filter yields an empty set and the constraint
simply stops binding; the failure is not cached, so a later turn retries.

Usage:
    from services.ai.baseline import get_baseline_cache
    
    properties = await get_baseline_cache().get_properties()
"""

import json
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import aiofiles
import httpx

from config.settings import settings
from config.constants import CSS_PROPERTY_COMPAT_PREFIX, WEB_FEATURES_FETCH_TIMEOUT
from utils.logging import get_logger, log_api_call
from utils.exceptions import ServiceUnavailable

logger = get_logger(__name__)


def extract_baseline_css_properties(data: Dict[str, Any]) -> FrozenSet[str]:
    """
    Collect CSS property names from Baseline features.
    
    Accepts both the current layout (``{"features": {...}}`` with
    ``compat_features`` keys such as ``css.properties.gap``) and the flat
    layout where each feature lists ``css_properties`` directly.
    
    Args:
        data: Parsed web-features data.json
        
    Returns:
        frozenset: Property names of features whose status has a baseline
    """
    features = data.get("features")
    if not isinstance(features, dict):
        features = data
    
    properties = set()
    for feature in features.values():
        if not isinstance(feature, dict):
            continue
        status = feature.get("status") or {}
        if not isinstance(status, dict) or not status.get("baseline"):
            continue
        
        for prop in feature.get("css_properties") or []:
            name = prop.get("name") if isinstance(prop, dict) else prop
            if isinstance(name, str) and name:
                properties.add(name)
        
        for key in feature.get("compat_features") or []:
            if isinstance(key, str) and key.startswith(CSS_PROPERTY_COMPAT_PREFIX):
                name = key[len(CSS_PROPERTY_COMPAT_PREFIX):].split(".")[0]
                if name:
                    properties.add(name)
    
    return frozenset(properties)


class BaselineCssCache:
    """
    Lazily-initialized, effectively immutable set of Baseline CSS properties.
    
    The backing set is only reachable through ``get_properties()``, which
    returns a frozenset. Two concurrent cold starts may both load the dataset;
    the second simply overwrites the first with an equal value.
    """
    
    def __init__(self, path: Optional[str] = None, url: Optional[str] = None):
        self._path = path
        self._url = url
        self._loaded = False
        self._properties: FrozenSet[str] = frozenset()
    
    @property
    def is_loaded(self) -> bool:
        return self._loaded
    
    async def get_properties(self) -> FrozenSet[str]:
        """Return the cached set, loading it on first use."""
        if self._loaded:
            return self._properties
        
        try:
            data = await self._load_dataset()
        except ServiceUnavailable as e:
            logger.error(
                f"Failed to load web-features data ({e.message}). "
                "Code generation continues without the Baseline constraint."
            )
            return frozenset()
        
        properties = extract_baseline_css_properties(data)
        self._properties = properties
        self._loaded = True
        logger.info(f"Loaded and cached {len(properties)} Baseline-supported CSS properties")
        return properties
    
    async def _load_dataset(self) -> Dict[str, Any]:
        """
        Read the dataset from the local path, falling back to the URL.
        
        Raises:
            ServiceUnavailable: If no source is usable or the content is invalid
        """
        if self._path and Path(self._path).is_file():
            try:
                async with aiofiles.open(self._path, mode="r", encoding="utf-8") as f:
                    data = json.loads(await f.read())
            except (OSError, json.JSONDecodeError) as e:
                raise ServiceUnavailable(
                    message=f"Could not read web-features file: {e}",
                    source=self._path,
                ) from e
        elif self._url:
            data = await self._fetch_dataset(self._url)
        else:
            raise ServiceUnavailable(
                message="No web-features dataset configured",
                source=self._path,
            )
        
        if not isinstance(data, dict):
            raise ServiceUnavailable(
                message="web-features dataset is not a JSON object",
                source=self._path or self._url,
            )
        return data
    
    async def _fetch_dataset(self, url: str) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=WEB_FEATURES_FETCH_TIMEOUT,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_api_call("web-features", url, success=False, error=str(e))
            raise ServiceUnavailable(
                message=f"Could not fetch web-features dataset: {e}",
                source=url,
            ) from e
        
        log_api_call("web-features", url, success=True)
        return data


# =============================================================================
# Process-wide Accessor
# =============================================================================

_baseline_cache: Optional[BaselineCssCache] = None


def get_baseline_cache() -> BaselineCssCache:
    """Get or create the process-wide cache from settings."""
    global _baseline_cache
    if _baseline_cache is None:
        _baseline_cache = BaselineCssCache(
            path=settings.WEB_FEATURES_PATH,
            url=settings.WEB_FEATURES_URL,
        )
    return _baseline_cache

