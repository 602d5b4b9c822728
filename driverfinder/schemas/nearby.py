# driverfinder/schemas/nearby.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from driverfinder.core.config import get_settings
from driverfinder.models.coordinate import Coordinate, check_lat_lng
from driverfinder.utils.geohash import check_precision

__all__ = ["NearbyDriverItem", "NearbyDriversResponse", "ProximityQuery"]


class ProximityQuery(BaseModel):
    """近傍ドライバー検索のクエリ。

    - 数値でない/範囲外の緯度・経度は InvalidCoordinate
    - 整数でない/1..12 以外の precision は InvalidPrecision（未指定なら設定値）

    検証は型変換より前に走るため、pydantic の ValidationError は出ない。
    """

    lat: float = Field(description="検索基準点の緯度（度）")
    lng: float = Field(description="検索基準点の経度（度）")
    precision: int | None = Field(
        default=None,
        validate_default=True,
        description="GeoHash 精度（文字数、既定: 設定値）",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _check_degrees(cls, v: object, info: ValidationInfo) -> float:
        if info.field_name == "lat":
            return check_lat_lng(v, 0.0)[0]
        return check_lat_lng(0.0, v)[1]

    @field_validator("precision", mode="before")
    @classmethod
    def _check_precision(cls, v: object) -> int:
        if v is None:
            return get_settings().query_precision
        return check_precision(v)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)


class NearbyDriverItem(BaseModel):
    id: int = Field(description="ドライバーID")
    name: str = Field(description="名前")
    latitude: float = Field(description="ドライバーの緯度")
    longitude: float = Field(description="ドライバーの経度")
    geohash: str = Field(description="キャッシュ済み GeoHash")
    distance_m: float = Field(description="検索基準点からの距離（m）")


class NearbyDriversResponse(BaseModel):
    items: list[NearbyDriverItem] = Field(description="候補ドライバー（候補順）")
    nearest: NearbyDriverItem | None = Field(
        default=None, description="最寄りのドライバー（見つからなければ null）"
    )
    total: int = Field(default=0, description="候補数")
    precision: int = Field(description="検索に使った GeoHash 精度")
    query_geohash: str = Field(description="検索基準点の GeoHash")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "items": [
                        {
                            "id": 1,
                            "name": "Ahmet",
                            "latitude": 41.0082,
                            "longitude": 28.9784,
                            "geohash": "sxk973m",
                            "distance_m": 35.36,
                        }
                    ],
                    "nearest": {
                        "id": 1,
                        "name": "Ahmet",
                        "latitude": 41.0082,
                        "longitude": 28.9784,
                        "geohash": "sxk973m",
                        "distance_m": 35.36,
                    },
                    "total": 1,
                    "precision": 7,
                    "query_geohash": "sxk973m",
                }
            ]
        }
    )
