"""
Gear selection and packing model for a single trip.

Every function here is pure: it takes the current GearSelection (and the gear
catalog wherever item types or weights matter) and returns a new
GearSelection or a derived view. Nothing is changed in place.

Requests that would break a packing rule are ignored and hand back the state
they were given:

- everything packed, and every container used, must be selected;
- an item sits in at most one container, never in itself;
- only container items can hold things;
- bags nest one level deep: a container can go into a top-level container
  as long as it holds no containers of its own.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from schemas.gear_schema import DEFAULT_CATEGORY, GearItem
from schemas.packing_schema import GearSelection, LooseItem, PackedContainer, PackingView
from schemas.trip_schema import Trip

logger = logging.getLogger(__name__)


def selection_from_trip(trip: Trip) -> GearSelection:
    return GearSelection(
        selected_gear_ids=list(trip.selected_gear_ids),
        packed_items={container_id: list(ids) for container_id, ids in trip.packed_items.items()},
    )


def _index(catalog: Iterable[GearItem]) -> Dict[str, GearItem]:
    return {item.id: item for item in catalog}


def _copy_packing(packed_items: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {container_id: list(ids) for container_id, ids in packed_items.items()}


def _is_container(index: Dict[str, GearItem], gear_id: str) -> bool:
    item = index.get(gear_id)
    return item is not None and item.is_container


def find_container(state: GearSelection, item_id: str) -> Optional[str]:
    """Returns the id of the container holding `item_id`, or None if it is not packed."""
    for container_id, ids in state.packed_items.items():
        if item_id in ids:
            return container_id
    return None


# --- Operations ---

def toggle_selection(state: GearSelection, gear_id: str) -> GearSelection:
    """
    Selects `gear_id` for the trip, or deselects it if it is already selected.

    Deselecting also drops the item's own packed list (if it was a container)
    and takes it out of whatever container held it. Its former contents stay
    selected and become loose.
    """
    if gear_id not in state.selected_gear_ids:
        return GearSelection(
            selected_gear_ids=[*state.selected_gear_ids, gear_id],
            packed_items=_copy_packing(state.packed_items),
        )

    return GearSelection(
        selected_gear_ids=[i for i in state.selected_gear_ids if i != gear_id],
        packed_items={
            container_id: [i for i in ids if i != gear_id]
            for container_id, ids in state.packed_items.items()
            if container_id != gear_id
        },
    )


def can_pack(state: GearSelection, item_id: str, container_id: str, catalog: Sequence[GearItem]) -> bool:
    if item_id == container_id:
        return False
    selected = set(state.selected_gear_ids)
    if item_id not in selected or container_id not in selected:
        return False

    index = _index(catalog)
    if not _is_container(index, container_id):
        return False

    holder = find_container(state, container_id)
    if holder is not None and find_container(state, holder) is not None:
        return False

    if _is_container(index, item_id):
        # The target bag must be top-level and the bag being packed must not hold bags itself.
        if holder is not None:
            return False
        if any(_is_container(index, packed_id) for packed_id in state.packed_items.get(item_id, [])):
            return False
    return True


def pack(state: GearSelection, item_id: str, container_id: str, catalog: Sequence[GearItem]) -> GearSelection:
    """Moves `item_id` into `container_id`, appending it to the container's list."""
    if not can_pack(state, item_id, container_id, catalog):
        logger.debug("Ignoring pack of %s into %s", item_id, container_id)
        return state
    if item_id in state.packed_items.get(container_id, []):
        return state

    packed = {
        cid: [i for i in ids if i != item_id]
        for cid, ids in state.packed_items.items()
    }
    packed[container_id] = [*packed.get(container_id, []), item_id]
    return GearSelection(selected_gear_ids=list(state.selected_gear_ids), packed_items=packed)


def unpack(state: GearSelection, item_id: str, container_id: Optional[str] = None) -> GearSelection:
    """
    Takes `item_id` out of a container so it becomes loose.

    With no `container_id`, the item is removed from whichever container
    holds it. Unpacking something that is not packed changes nothing.
    """
    holder = container_id if container_id is not None else find_container(state, item_id)
    if holder is None or item_id not in state.packed_items.get(holder, []):
        return state

    packed = _copy_packing(state.packed_items)
    packed[holder] = [i for i in packed[holder] if i != item_id]
    return GearSelection(selected_gear_ids=list(state.selected_gear_ids), packed_items=packed)


def drop_container(state: GearSelection, container_id: str) -> GearSelection:
    """Empties a container out of the packing map; its contents stay selected and become loose."""
    if container_id not in state.packed_items:
        return state
    packed = _copy_packing(state.packed_items)
    del packed[container_id]
    return GearSelection(selected_gear_ids=list(state.selected_gear_ids), packed_items=packed)


def unnest_container(state: GearSelection, container_id: str) -> GearSelection:
    """
    Takes a newly made container out of a bag that is itself packed.

    A plain item may sit in a nested bag, but once it becomes a container it
    would be a bag two levels down. It is unpacked and becomes loose.
    """
    holder = find_container(state, container_id)
    if holder is None or find_container(state, holder) is None:
        return state
    return unpack(state, container_id, holder)


def remove_gear(state: GearSelection, gear_id: str) -> GearSelection:
    """Forgets a gear item entirely, e.g. after it was deleted from the library."""
    if gear_id in state.selected_gear_ids:
        return toggle_selection(state, gear_id)
    if gear_id in state.packed_items or find_container(state, gear_id) is not None:
        return GearSelection(
            selected_gear_ids=list(state.selected_gear_ids),
            packed_items={
                cid: [i for i in ids if i != gear_id]
                for cid, ids in state.packed_items.items()
                if cid != gear_id
            },
        )
    return state


# --- Derived views ---

def grouped_by_category(catalog: Iterable[GearItem]) -> List[Tuple[str, List[GearItem]]]:
    """Groups the library by category, names sorted within a group and Miscellaneous last."""
    groups: Dict[str, List[GearItem]] = {}
    for item in catalog:
        groups.setdefault(item.category or DEFAULT_CATEGORY, []).append(item)

    categories = sorted(groups, key=lambda c: (c == DEFAULT_CATEGORY, c.casefold(), c))
    return [
        (category, sorted(groups[category], key=lambda item: (item.name.casefold(), item.name)))
        for category in categories
    ]


def selected_items(selected_gear_ids: Iterable[str], catalog: Iterable[GearItem]) -> List[GearItem]:
    """Catalog entries for the selected ids, in catalog order. Unknown ids are skipped."""
    selected = set(selected_gear_ids)
    return [item for item in catalog if item.id in selected]


def total_weight(selected_gear_ids: Iterable[str], catalog: Iterable[GearItem]) -> float:
    """Total weight in grams of the selected gear, bags included."""
    return sum(item.weight for item in selected_items(selected_gear_ids, catalog))


def format_weight_kg(grams: float) -> str:
    return f"{grams / 1000:.2f} kg"


def packed_ids(state: GearSelection) -> Set[str]:
    return {item_id for ids in state.packed_items.values() for item_id in ids}


def top_level_items(state: GearSelection, catalog: Iterable[GearItem]) -> List[GearItem]:
    """Selected items that are not inside any container, bags included."""
    inside = packed_ids(state)
    return [item for item in selected_items(state.selected_gear_ids, catalog) if item.id not in inside]


def loose_items(top_level: Iterable[GearItem]) -> List[GearItem]:
    return [item for item in top_level if not item.is_container]


def container_contents(state: GearSelection, catalog: Iterable[GearItem], container_id: str) -> Tuple[List[GearItem], float]:
    """Items packed in one container, in packing order, and their combined weight."""
    index = _index(catalog)
    items = [index[i] for i in state.packed_items.get(container_id, []) if i in index]
    return items, sum(item.weight for item in items)


def available_containers(state: GearSelection, catalog: Sequence[GearItem], item_id: str) -> List[GearItem]:
    """Selected containers `item_id` could be packed into right now."""
    return [
        item for item in selected_items(state.selected_gear_ids, catalog)
        if item.is_container and can_pack(state, item_id, item.id, catalog)
    ]


# --- Change detection ---

def _packing_signature(packed_items: Dict[str, List[str]]) -> Dict[str, frozenset]:
    # An empty bag is the same as a bag that was never used.
    return {container_id: frozenset(ids) for container_id, ids in packed_items.items() if ids}


def has_unsaved_changes(original: GearSelection, current: GearSelection) -> bool:
    """Compares selections as sets and packing maps as container -> set of ids."""
    if set(original.selected_gear_ids) != set(current.selected_gear_ids):
        return True
    return _packing_signature(original.packed_items) != _packing_signature(current.packed_items)


def build_packing_view(
    trip_id: str,
    saved: GearSelection,
    current: GearSelection,
    catalog: Sequence[GearItem],
    is_saving: bool = False,
) -> PackingView:
    chosen = selected_items(current.selected_gear_ids, catalog)
    top_level = top_level_items(current, catalog)
    grams = total_weight(current.selected_gear_ids, catalog)

    containers = []
    for item in chosen:
        if not item.is_container:
            continue
        contents, weight = container_contents(current, catalog, item.id)
        containers.append(PackedContainer(
            container=item,
            packed_in=find_container(current, item.id),
            items=contents,
            item_count=len(contents),
            packed_weight=weight,
        ))

    loose = [
        LooseItem(
            item=item,
            available_container_ids=[c.id for c in available_containers(current, catalog, item.id)],
        )
        for item in loose_items(top_level)
    ]

    return PackingView(
        trip_id=trip_id,
        selected_gear_ids=list(current.selected_gear_ids),
        packed_items=_copy_packing(current.packed_items),
        selected_items=chosen,
        top_level_items=top_level,
        containers=containers,
        loose_items=loose,
        total_weight_grams=grams,
        total_weight_display=format_weight_kg(grams),
        has_unsaved_changes=has_unsaved_changes(saved, current),
        is_saving=is_saving,
    )
