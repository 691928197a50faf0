"""Map annotation grouping for the place set (presentation only)."""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from coffee_finder.config.settings import PresentationSettings, get_settings
from coffee_finder.models.geo import Location, Place


@dataclass(frozen=True)
class MapAnnotation:
    title: str
    coordinate: Location
    member_count: int = 1
    label: Optional[str] = None  # set on clusters only

    @property
    def is_cluster(self) -> bool:
        return self.member_count > 1


def cluster_label(count: int, config: Optional[PresentationSettings] = None) -> str:
    """Badge text for a cluster: the member count, capped at e.g. '99+'."""
    config = config or get_settings().presentation
    if count < config.cluster_max_count:
        return str(count)
    return config.cluster_max_text


def build_annotations(
    places: Sequence[Place],
    config: Optional[PresentationSettings] = None,
) -> List[MapAnnotation]:
    """
    Group places sharing a rounded-coordinate grid cell into clusters.

    Cells keep the order in which their first member appears. A cluster
    sits at the mean coordinate of its members.
    """
    config = config or get_settings().presentation
    cells: Dict[Tuple[float, float], List[Place]] = OrderedDict()
    for place in places:
        key = (
            round(place.coordinate.latitude, config.cluster_grid_decimals),
            round(place.coordinate.longitude, config.cluster_grid_decimals),
        )
        cells.setdefault(key, []).append(place)

    annotations = []
    for members in cells.values():
        if len(members) == 1:
            place = members[0]
            annotations.append(MapAnnotation(
                title=place.name or config.annotation_default_text,
                coordinate=place.coordinate,
            ))
            continue

        lat = sum(p.coordinate.latitude for p in members) / len(members)
        lon = sum(p.coordinate.longitude for p in members) / len(members)
        annotations.append(MapAnnotation(
            title=config.annotation_default_text,
            coordinate=Location(lat, lon),
            member_count=len(members),
            label=cluster_label(len(members), config),
        ))
    return annotations
