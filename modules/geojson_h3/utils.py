from typing import Iterable, List, Sequence


def flatten(cell_sets: Iterable[Iterable[str]]) -> List[str]:
    """
    Union several cell lists into one, keeping first-occurrence order.
    """
    seen = set()
    out: List[str] = []
    for cells in cell_sets:
        for cell in cells:
            if cell in seen:
                continue
            seen.add(cell)
            out.append(cell)
    return out


def centroid(polygon: Sequence[Sequence[Sequence[float]]]) -> List[float]:
    """
    Vertex mean of the outer ring, as [lng, lat].

    Every vertex counts once, including a repeated closing vertex. This is
    not an area-weighted centroid; it is only used to seed a fallback cell.
    """
    lng_sum = 0.0
    lat_sum = 0.0
    count = 0
    for pt in polygon[0]:
        lng_sum += pt[0]
        lat_sum += pt[1]
        count += 1
    return [lng_sum / count, lat_sum / count]
