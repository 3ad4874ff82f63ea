"""
Tool Registry and name resolution.

A registry is a declarative, immutable set of tool descriptors plus an ordered
list of keyword rules. ``ToolRegistry.resolve`` maps whatever name the agent
platform sent to a canonical tool name.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ToolDescriptor(BaseModel):
    """Static description of one tool exposed by a gateway."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Canonical tool name")
    display_name: str
    description: str
    category: str
    type: str = Field(default="query", description="'query' for reads, 'action' for writes")
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )
    requires_confirmation: bool = False
    downstream_action: Optional[str] = Field(default=None, description="SDK action or API operation name")
    aliases: frozenset[str] = Field(default_factory=frozenset)

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(self.parameters.get("properties", {}))

    def to_tool_listing(self) -> Dict[str, Any]:
        """Shape used by ``GET /tools``."""
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "type": self.type,
            "requiresConfirmation": self.requires_confirmation,
            "parameters": self.parameters,
            "aliases": sorted(self.aliases),
        }

    def to_action_listing(self) -> Dict[str, Any]:
        """Shape used by ``GET /actions``."""
        return {
            "id": self.name,
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "parameters": self.parameters,
            "type": "action" if self.requires_confirmation else "query",
            "category": self.category,
            "downstreamAction": self.downstream_action,
        }


class ToolRegistry:
    """
    Immutable registry of tools for one gateway.

    Canonical names are unique, and each alias belongs to exactly one tool;
    both are checked at construction.
    """

    def __init__(
        self,
        tools: Iterable[ToolDescriptor],
        keyword_rules: Sequence[Tuple[str, str]] = (),
    ):
        self._tools: Dict[str, ToolDescriptor] = {}
        self._aliases: Dict[str, str] = {}

        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

        for tool in self._tools.values():
            for alias in tool.aliases:
                if alias in self._tools and alias != tool.name:
                    raise ValueError(f"Alias '{alias}' of {tool.name} shadows a canonical tool name")
                owner = self._aliases.setdefault(alias, tool.name)
                if owner != tool.name:
                    raise ValueError(f"Alias '{alias}' claimed by both {owner} and {tool.name}")

        rules: List[Tuple[str, str]] = []
        for keyword, target in keyword_rules:
            if target not in self._tools:
                raise ValueError(f"Keyword rule '{keyword}' points at unknown tool {target}")
            rules.append((keyword.lower(), target))
        self._keyword_rules: Tuple[Tuple[str, str], ...] = tuple(rules)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    @property
    def categories(self) -> List[str]:
        return sorted({tool.category for tool in self._tools.values()})

    @property
    def keyword_rules(self) -> Tuple[Tuple[str, str], ...]:
        return self._keyword_rules

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def resolve(self, requested_name: str) -> str:
        """Map a requested name to a canonical tool name.

        Exact name, then exact alias, then the first keyword rule whose
        keyword occurs in the lower-cased name. Unmatched names come back
        unchanged.
        """
        if requested_name in self._tools:
            return requested_name

        canonical = self._aliases.get(requested_name)
        if canonical:
            logger.debug("Resolved alias '%s' -> '%s'", requested_name, canonical)
            return canonical

        lowered = requested_name.lower()
        for keyword, target in self._keyword_rules:
            if keyword in lowered:
                logger.debug("Resolved '%s' -> '%s' via keyword '%s'", requested_name, target, keyword)
                return target

        return requested_name

    def to_tool_listings(self) -> List[Dict[str, Any]]:
        return [tool.to_tool_listing() for tool in self._tools.values()]

    def to_action_listings(self) -> List[Dict[str, Any]]:
        return [tool.to_action_listing() for tool in self._tools.values()]
