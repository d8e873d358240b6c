#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Feb 12 10:02:16 2026

@author: petermillington
"""
from agents.traders import ZIAgent, UnitAgent, OneupmanshipAgent, KaplanSniperAgent

# Default agent factory map.  Pass a different mapping to Simulation to add
# or replace agent types; this one is never modified.
AGENT_REGISTRY = {
    "ZIAgent": ZIAgent,
    "UnitAgent": UnitAgent,
    "OneupmanshipAgent": OneupmanshipAgent,
    "KaplanSniperAgent": KaplanSniperAgent,
}


def new_agent(registry, name: str, **kwargs):
    """Create an agent of the registered type `name`."""
    try:
        factory = registry[name]
    except KeyError:
        raise ValueError(f"Unknown agent type {name!r}; registered: {sorted(registry)}") from None
    return factory(**kwargs)
