# keepsake/story/validate.py
from __future__ import annotations

from collections import deque
from typing import List, Set

from keepsake.story.spec import SceneId, Storyline
from keepsake.story.state import GiftId


def _reachable(storyline: Storyline) -> Set[SceneId]:
    seen = {storyline.entry}
    queue = deque([storyline.entry])
    while queue:
        scene = queue.popleft()
        for nxt in storyline.edges.get(scene, ()):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def validate_storyline(spec: Storyline) -> List[str]:
    """
    Validate a declarative Storyline for authoring sanity.

    Returns a list of human-readable issues (empty = good).
    - No pygame
    - No scene construction
    - Pure reads only
    """
    issues: List[str] = []

    # ---- Identity ----------------------------------------------------
    if not spec.id or not isinstance(spec.id, str):
        issues.append("id missing/invalid")
    elif any(c.isspace() for c in spec.id):
        issues.append(f"id contains whitespace: {spec.id!r}")

    # ---- Closed sets -------------------------------------------------
    for name in ("entry", "hub", "finale"):
        value = getattr(spec, name)
        if not isinstance(value, SceneId):
            issues.append(f"{name} is not a SceneId (got {value!r})")

    for src, dsts in spec.edges.items():
        if not isinstance(src, SceneId):
            issues.append(f"edge source is not a SceneId: {src!r}")
        for dst in dsts:
            if not isinstance(dst, SceneId):
                issues.append(f"edge {src!r} -> {dst!r}: target is not a SceneId")
    if issues:
        return issues

    # ---- Hub + finale ------------------------------------------------
    hub_exits = spec.edges.get(spec.hub, ())
    if spec.finale not in hub_exits:
        issues.append(f"hub {spec.hub.value!r} has no edge to finale {spec.finale.value!r}")
    if spec.finale == spec.hub or spec.finale == spec.entry:
        issues.append("finale must differ from entry and hub")

    # ---- Gifts -------------------------------------------------------
    if not spec.gifts:
        issues.append("storyline declares no gifts")

    gift_ids = [g.gift_id for g in spec.gifts]
    scene_ids = [g.scene_id for g in spec.gifts]
    if len(set(gift_ids)) != len(gift_ids):
        issues.append("duplicate gift ids")
    if len(set(scene_ids)) != len(scene_ids):
        issues.append("two gifts share one scene")

    for gift in spec.gifts:
        if not isinstance(gift.gift_id, GiftId):
            issues.append(f"gift {gift!r}: gift_id is not a GiftId")
            continue
        if gift.scene_id in (spec.hub, spec.finale, spec.entry):
            issues.append(f"gift {gift.gift_id.value!r} opens a reserved scene {gift.scene_id.value!r}")
        if gift.scene_id not in hub_exits:
            issues.append(f"hub has no edge to gift scene {gift.scene_id.value!r}")
        if spec.hub not in spec.edges.get(gift.scene_id, ()):
            issues.append(f"gift scene {gift.scene_id.value!r} does not return to the hub")

    for req in spec.required_gifts:
        if req not in gift_ids:
            issues.append(f"required gift {getattr(req, 'value', req)!r} is not declared")

    # ---- Reachability -----------------------------------------------
    reachable = _reachable(spec)
    for scene in spec.scenes:
        if scene not in reachable:
            issues.append(f"scene {scene.value!r} unreachable from entry {spec.entry.value!r}")

    return issues
