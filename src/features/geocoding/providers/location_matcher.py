"""地名辞書による住所 → 座標のオフライン推定"""

import math
import random
from typing import Optional

from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_address_key, truncate_text
from ..domain.gazetteer import (
    DISTRICT_CENTRE,
    DISTRICT_NAME,
    DISTRICT_RADIUS,
    KNOWN_PLACES,
    MUKIM_CENTRES,
    KnownPlace,
    MukimCentre,
)
from ..domain.models import Coordinate

logger = get_logger(__name__)

# キーワード一致時の散布幅（±0.002度 ≒ 200m）
KEYWORD_JITTER = 0.004


class LocationMatcher:
    """
    地名辞書を使った座標推定

    Nominatimで見つからない住所（taman名やkampung名だけの住所など）に対する
    フォールバック。地図上で点が重ならないよう、既定では座標を少し散らす
    """

    def __init__(
        self,
        known_places: Optional[dict[str, KnownPlace]] = None,
        mukim_centres: Optional[dict[str, MukimCentre]] = None,
        rng: Optional[random.Random] = None,
        jitter: bool = True,
    ) -> None:
        """
        Args:
            known_places: キーワード辞書（Noneの場合は組み込み辞書）
            mukim_centres: mukim中心座標（Noneの場合は組み込み辞書）
            rng: 乱数生成器（テストではシード固定のものを渡す）
            jitter: 座標を散らすか
        """
        self.known_places = known_places if known_places is not None else KNOWN_PLACES
        self.mukim_centres = mukim_centres if mukim_centres is not None else MUKIM_CENTRES
        self.rng = rng or random.Random()
        self.jitter = jitter

    def match(
        self,
        address: str,
        mukim: Optional[str] = None,
        daerah: Optional[str] = None,
    ) -> Optional[Coordinate]:
        """
        住所から座標を推定

        1. 住所に含まれる最長のキーワード
        2. mukim名（完全一致 → 大文字小文字を無視）
        3. daerah が Hulu Selangor なら district の中心付近

        Returns:
            Optional[Coordinate]: 推定座標（推定できない場合はNone）
        """
        if not address:
            logger.debug("No address provided for matching")
            return None

        normalized = normalize_address_key(address)
        logger.debug(f"Matching address: {truncate_text(address, 80)}")

        place, keyword = self._best_keyword_match(normalized)
        if place is not None:
            logger.debug(f"Matched keyword '{keyword}'")
            return self._scatter_square(place.lat, place.lon, KEYWORD_JITTER)

        if mukim:
            centre = self._find_mukim(mukim)
            if centre is not None:
                logger.debug(f"Using mukim centre: {mukim}")
                return self._scatter_radius(centre.lat, centre.lon, centre.radius)
            logger.debug(f"Mukim '{mukim}' not found in gazetteer")

        if daerah == DISTRICT_NAME:
            logger.debug(f"Using district centre: {DISTRICT_NAME}")
            return self._scatter_radius(DISTRICT_CENTRE[0], DISTRICT_CENTRE[1], DISTRICT_RADIUS)

        logger.info(f"No gazetteer match for address: {truncate_text(address, 80)}")
        return None

    def _best_keyword_match(self, normalized: str) -> tuple[Optional[KnownPlace], Optional[str]]:
        """より長い（具体的な）キーワードを優先"""
        best: Optional[KnownPlace] = None
        best_keyword: Optional[str] = None

        for place in self.known_places.values():
            for keyword in place.keywords:
                if keyword.lower() in normalized:
                    if best_keyword is None or len(keyword) > len(best_keyword):
                        best = place
                        best_keyword = keyword

        return best, best_keyword

    def _find_mukim(self, mukim: str) -> Optional[MukimCentre]:
        if mukim in self.mukim_centres:
            return self.mukim_centres[mukim]

        mukim_lower = mukim.lower()
        for name, centre in self.mukim_centres.items():
            if name.lower() == mukim_lower:
                return centre

        return None

    def _scatter_square(self, lat: float, lon: float, width: float) -> Coordinate:
        if not self.jitter:
            return Coordinate(lat=lat, lon=lon)
        return Coordinate(
            lat=lat + (self.rng.random() - 0.5) * width,
            lon=lon + (self.rng.random() - 0.5) * width,
        )

    def _scatter_radius(self, lat: float, lon: float, radius: float) -> Coordinate:
        if not self.jitter:
            return Coordinate(lat=lat, lon=lon)
        angle = self.rng.random() * 2 * math.pi
        distance = self.rng.random() * radius
        return Coordinate(
            lat=lat + distance * math.cos(angle),
            lon=lon + distance * math.sin(angle),
        )
