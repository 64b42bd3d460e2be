"""Configuration helpers for cookieflow runtime files.

Provides the loader for site login probes. Each probe names the URL to visit
and the URL tokens that tell a live session apart from a bounce to a login
page, so new sites can be checked without code changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping

import yaml

from cookieflow.core.errors import ConfigError

if TYPE_CHECKING:
    from cookieflow.services.session.login import UrlContainsRule


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SITES_PATH = CONFIG_DIR / "sites.yaml"


class SiteConfigError(ConfigError):
    """Raised when a site probe configuration fails validation."""


@dataclass(frozen=True)
class SiteProbe:
    """Login probe definition for one site."""

    name: str
    domain: str
    probe_url: str
    includes: tuple[str, ...]
    excludes: tuple[str, ...]

    def indicator(self) -> UrlContainsRule:
        """Return the URL rule that classifies this site's landing page."""

        from cookieflow.services.session.login import UrlContainsRule

        return UrlContainsRule(includes=self.includes, excludes=self.excludes)


def load_site_probes(path: str | Path | None = None) -> Dict[str, SiteProbe]:
    """Load site probes keyed by site name."""

    sites_path = Path(path) if path else DEFAULT_SITES_PATH
    raw = _load_yaml(sites_path)
    sites = raw.get("sites")
    if not isinstance(sites, Mapping) or not sites:
        raise SiteConfigError("sites 节点缺失或格式错误")
    return {str(name): _build_probe(str(name), spec) for name, spec in sites.items()}


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"站点配置文件未找到: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("站点配置必须是字典结构")
    return data


def _build_probe(name: str, spec: Any) -> SiteProbe:
    if not isinstance(spec, Mapping):
        raise SiteConfigError(f"site {name} 必须是映射")
    probe_url = spec.get("probe_url")
    if not isinstance(probe_url, str) or not probe_url.strip():
        raise SiteConfigError(f"site {name} 缺少 probe_url")
    domain = spec.get("domain", name)
    if not isinstance(domain, str) or not domain.strip():
        raise SiteConfigError(f"site {name} 的 domain 必须为字符串")
    return SiteProbe(
        name=name,
        domain=domain.strip(),
        probe_url=probe_url.strip(),
        includes=_tokens(name, "includes", spec.get("includes")),
        excludes=_tokens(name, "excludes", spec.get("excludes")),
    )


def _tokens(name: str, key: str, node: Any) -> tuple[str, ...]:
    if node in (None, ""):
        return ()
    if isinstance(node, str):
        node = [node]
    if not isinstance(node, list):
        raise SiteConfigError(f"site {name} {key} 必须是列表")
    tokens = []
    for idx, token in enumerate(node):
        if not isinstance(token, str) or not token:
            raise SiteConfigError(f"site {name} {key}[{idx}] 必须是非空字符串")
        tokens.append(token)
    return tuple(tokens)


__all__ = [
    "DEFAULT_SITES_PATH",
    "SiteConfigError",
    "SiteProbe",
    "load_site_probes",
]
