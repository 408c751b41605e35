"""
Provider Index

Per-run lookup structure mapping ``(effective type, qualifier)`` to the
providers that satisfy it, plus a component-by-type lookup.  Built once per
analysis and shared by every detector and the validator.

Type names coming from the front end may be fully qualified
(``com.example.UserRepository``) or simple (``UserRepository``).  Two names
match when they are equal, or when either side is simple and the simple
names agree.  Generic arguments are compared verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import Component, Provider


ProviderKey = Tuple[str, Optional[str]]


# ---------------------------------------------------------------------------
# Type name helpers
# ---------------------------------------------------------------------------

def split_generic(type_name: str) -> Tuple[str, str]:
    """Split ``pkg.List<User>`` into ``("pkg.List", "<User>")``."""
    idx = type_name.find("<")
    if idx < 0:
        return type_name.strip(), ""
    return type_name[:idx].strip(), type_name[idx:].strip()


def simple_name(type_name: str) -> str:
    base, generic = split_generic(type_name)
    return base.rsplit(".", 1)[-1] + generic


def package_of(type_name: str) -> str:
    base, _ = split_generic(type_name)
    return base.rsplit(".", 1)[0] if "." in base else ""


def is_qualified(type_name: str) -> bool:
    return "." in split_generic(type_name)[0]


def types_match(a: str, b: str) -> bool:
    if a == b:
        return True
    if is_qualified(a) and is_qualified(b):
        return False
    return simple_name(a) == simple_name(b)


# ---------------------------------------------------------------------------
# Provider references
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProviderRef:
    """A provider together with the component that declares it."""
    component: Component
    provider: Provider

    @property
    def component_name(self) -> str:
        return self.component.fully_qualified_name

    @property
    def reference(self) -> str:
        return f"{self.component_name}.{self.provider.method_name}"

    @property
    def effective_type(self) -> str:
        return self.provider.effective_type

    @property
    def qualifier(self) -> Optional[str]:
        return self.provider.named_qualifier

    @property
    def key(self) -> ProviderKey:
        return (self.effective_type, self.qualifier)


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class ProviderIndex:
    """
    Rebuildable ``(type, qualifier) -> [ProviderRef]`` index.

    Only active providers are indexed.  Multi-binding providers are kept in
    their buckets but excluded from lookups and from grouping unless asked
    for explicitly.
    """

    def __init__(self, components: Optional[Iterable[Component]] = None):
        self.components: List[Component] = list(components or [])
        self._by_key: Dict[ProviderKey, List[ProviderRef]] = {}
        self._keys_by_simple: Dict[str, List[ProviderKey]] = {}
        self._components_by_simple: Dict[str, List[Component]] = {}
        self._components_by_fqn: Dict[str, Component] = {}
        self._known_types: Optional[List[str]] = None
        self.skipped_providers = 0

        for component in self.components:
            self._components_by_fqn.setdefault(component.fully_qualified_name, component)
            self._components_by_simple.setdefault(component.class_name, []).append(component)
            for provider in component.providers:
                if not provider.is_active:
                    self.skipped_providers += 1
                    continue
                ref = ProviderRef(component, provider)
                if ref.key not in self._by_key:
                    self._by_key[ref.key] = []
                    self._keys_by_simple.setdefault(simple_name(ref.effective_type), []).append(ref.key)
                self._by_key[ref.key].append(ref)

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def groups(self, include_multi_binding: bool = False) -> Iterator[Tuple[ProviderKey, List[ProviderRef]]]:
        """Yield every ``(key, providers)`` bucket in first-seen order."""
        for key, refs in self._by_key.items():
            if not include_multi_binding:
                refs = [r for r in refs if not r.provider.is_multi_binding]
            if refs:
                yield key, refs

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _matching_keys(self, type_name: str) -> List[ProviderKey]:
        candidates = self._keys_by_simple.get(simple_name(type_name), [])
        return [k for k in candidates if types_match(k[0], type_name)]

    def lookup(self, type_name: str, qualifier: Optional[str]) -> List[ProviderRef]:
        """Providers satisfying exactly ``(type_name, qualifier)``."""
        out: List[ProviderRef] = []
        for key in self._matching_keys(type_name):
            if key[1] != qualifier:
                continue
            out.extend(r for r in self._by_key[key] if not r.provider.is_multi_binding)
        return out

    def providers_for_type(self, type_name: str) -> List[ProviderRef]:
        """All non-multi-binding providers of ``type_name`` under any qualifier."""
        out: List[ProviderRef] = []
        for key in self._matching_keys(type_name):
            out.extend(r for r in self._by_key[key] if not r.provider.is_multi_binding)
        return out

    def qualifiers_for(self, type_name: str) -> List[Optional[str]]:
        """Distinct qualifiers offered for ``type_name``, first-seen order."""
        seen: List[Optional[str]] = []
        for ref in self.providers_for_type(type_name):
            if ref.qualifier not in seen:
                seen.append(ref.qualifier)
        return seen

    def known_types(self) -> List[str]:
        """Provided types and component names, first-seen order."""
        if self._known_types is None:
            merged = dict.fromkeys(type_name for type_name, _ in self._by_key)
            merged.update(dict.fromkeys(self._components_by_fqn))
            self._known_types = list(merged)
        return self._known_types

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def find_component(self, fqn: str) -> Optional[Component]:
        return self._components_by_fqn.get(fqn)

    def components_for_type(self, type_name: str) -> List[Component]:
        if split_generic(type_name)[1]:
            return []
        return [
            c for c in self._components_by_simple.get(simple_name(type_name), [])
            if types_match(c.fully_qualified_name, type_name)
        ]

    def component_for(self, type_name: str, consumer: Optional[Component] = None) -> Optional[Component]:
        """
        Resolve a dependency target to a single component.

        Exact fully qualified match first, then a same-package match for the
        consumer, then the first candidate in input order.
        """
        exact = self._components_by_fqn.get(type_name)
        if exact is not None:
            return exact
        candidates = self.components_for_type(type_name)
        if not candidates:
            return None
        if consumer is not None:
            for c in candidates:
                if c.package_name == consumer.package_name:
                    return c
        return candidates[0]

    def is_resolvable(self, type_name: str, qualifier: Optional[str]) -> bool:
        """True when a provider, or for unqualified requests a component, satisfies the request."""
        if self.lookup(type_name, qualifier):
            return True
        return qualifier is None and bool(self.components_for_type(type_name))
