import os
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

import pygame

T = TypeVar("T")


@dataclass(frozen=True)
class AssetId:
    index: int


class Assets(Generic[T]):
    """
    Slot storage for assets of one kind. Ids of removed assets are handed
    out again by later adds.
    """

    def __init__(self):
        self.data: List[Optional[T]] = []
        self.reuse: List[AssetId] = []

    def __len__(self):
        return sum(1 for asset in self.data if asset is not None)

    def __contains__(self, asset_id: AssetId):
        return self.get(asset_id) is not None

    def add(self, asset: T) -> AssetId:
        if self.reuse:
            asset_id = self.reuse.pop()
        else:
            asset_id = AssetId(len(self.data))
            self.data.append(None)

        self.data[asset_id.index] = asset
        return asset_id

    def remove(self, asset_id: AssetId):
        if 0 <= asset_id.index < len(self.data) and self.data[asset_id.index] is not None:
            self.data[asset_id.index] = None
            self.reuse.append(asset_id)

    def get(self, asset_id: AssetId) -> Optional[T]:
        if 0 <= asset_id.index < len(self.data):
            return self.data[asset_id.index]
        return None

    def clear(self):
        self.data.clear()
        self.reuse.clear()


def load_image(path, convert_alpha=True) -> pygame.Surface:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file {path} not found.")

    img = pygame.image.load(path)
    if convert_alpha:
        # needs an open display
        img = img.convert_alpha()

    return img
