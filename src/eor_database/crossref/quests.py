"""
Quest relations: reward items, start NPC and start map.

Quests do not store a map id; the start map is derived from the first
spawn location of the start NPC.
"""

from typing import Callable, Dict, Optional

from ..game_data.models import GameMap, Npc
from ..game_data.store import DatasetStore
from .results import RelationBuilder, RelationResult
from .rows import RewardItemRow


def quest_rewards(store: DatasetStore, quest_id: int) -> RelationResult[RewardItemRow]:
    """Both reward arrays resolved into items, first array first."""
    builder: RelationBuilder[RewardItemRow] = RelationBuilder("quest_rewards", quest_id)
    quest = store.get_quest(quest_id)
    if quest is None:
        return builder.result()

    for reward in quest.rewards:
        item = store.get_item(reward.item_id)
        if item is None:
            builder.omit(f"item {reward.item_id}")
            continue
        builder.add(RewardItemRow(item_id=item.id, item_name=item.name, amount=reward.amount))
    return builder.result()


def quest_start_npc(store: DatasetStore, quest_id: int) -> Optional[Npc]:
    """The quest-giver NPC for the quest's first start-NPC id."""
    quest = store.get_quest(quest_id)
    if quest is None or quest.start_npc_vendor_id is None:
        return None
    return store.get_quest_giver(quest.start_npc_vendor_id)


def quest_start_map(store: DatasetStore, quest_id: int) -> Optional[GameMap]:
    """The first map on which the quest's start NPC spawns."""
    npc = quest_start_npc(store, quest_id)
    if npc is None:
        return None
    maps = store.maps.maps_with_spawn(npc.id)
    return maps[0] if maps else None


QUEST_RELATIONS: Dict[str, Callable[[DatasetStore, int], RelationResult]] = {
    "rewards": quest_rewards,
}
