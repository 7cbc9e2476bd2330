from __future__ import annotations

import logging
from typing import Any

import numpy as np

from clipsense.errors import InvalidInputError
from clipsense.features.frame_scorer import as_pixel_rows
from clipsense.models import ColorCluster

logger = logging.getLogger(__name__)

DEFAULT_PALETTE_SIZE = 5
DEFAULT_ITERATIONS = 10
DEFAULT_IMAGE_PIXEL_STRIDE = 10


def quantize_colors(
    pixels: Any,
    k: int = DEFAULT_PALETTE_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
    pixel_stride: int = 1,
) -> tuple[ColorCluster, ...]:
    """Cluster pixel colours with deterministic, fixed-iteration k-means.

    Centroids are seeded with the first ``k`` sampled pixels (black when fewer
    exist) and refined for exactly ``iterations`` rounds. A pixel equidistant
    to several centroids joins the lowest-indexed one; a cluster that ends a
    round empty is reset to black. Clusters keep their seed order.
    """

    if k < 1:
        raise InvalidInputError(f"Palette size k must be >= 1, got {k}.")
    if iterations < 0:
        raise InvalidInputError(f"iterations must be non-negative, got {iterations}.")
    if pixel_stride < 1:
        raise InvalidInputError(f"pixel_stride must be >= 1, got {pixel_stride}.")

    sampled = as_pixel_rows(pixels)[::pixel_stride, :3]

    centroids = np.zeros((k, 3), dtype=np.int64)
    seed_count = min(k, len(sampled))
    centroids[:seed_count] = sampled[:seed_count]

    if len(sampled) == 0:
        logger.debug("No pixels to quantize; returning %d black clusters", k)
        return tuple(ColorCluster(r=0, g=0, b=0) for _ in range(k))

    for _ in range(iterations):
        centroids = _refine(sampled, centroids)

    return tuple(ColorCluster(r=int(c[0]), g=int(c[1]), b=int(c[2])) for c in centroids)


def extract_palette(
    image: Any,
    k: int = DEFAULT_PALETTE_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
    pixel_stride: int = DEFAULT_IMAGE_PIXEL_STRIDE,
) -> tuple[ColorCluster, ...]:
    """Dominant colours of one frame, sampling every ``pixel_stride``-th pixel."""

    return quantize_colors(image, k=k, iterations=iterations, pixel_stride=pixel_stride)


def _refine(pixels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    # one centroid at a time keeps memory at O(N); strict < leaves ties with the lower index
    best_distance = ((pixels - centroids[0]) ** 2).sum(axis=1)
    assignment = np.zeros(len(pixels), dtype=np.int64)
    for index in range(1, len(centroids)):
        distance = ((pixels - centroids[index]) ** 2).sum(axis=1)
        closer = distance < best_distance
        best_distance = np.where(closer, distance, best_distance)
        assignment[closer] = index

    updated = np.zeros_like(centroids)
    for index in range(len(centroids)):
        members = pixels[assignment == index]
        if len(members) == 0:
            continue
        updated[index] = _round_half_up(members.sum(axis=0) / len(members))
    return updated


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5).astype(np.int64)
