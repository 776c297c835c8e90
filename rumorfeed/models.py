"""
Pydantic models for roster rumor records.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_TEAM = 'Unknown Team'
UNKNOWN_POSITION = 'Unknown Position'


class Entity(BaseModel):
    """A named thing that may link somewhere (source, player)."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ''


class Team(BaseModel):
    """Team descriptor taken from a logo image."""

    model_config = ConfigDict(frozen=True)

    name: str = UNKNOWN_TEAM
    image: str = ''

    @field_validator('name')
    @classmethod
    def name_nonempty(cls, v: str) -> str:
        return v.strip() or UNKNOWN_TEAM


class Side(BaseModel):
    """One end of a move: where the player comes from or goes to."""

    model_config = ConfigDict(frozen=True)

    region: str = ''
    team: Team = Field(default_factory=Team)
    position: str = UNKNOWN_POSITION

    @field_validator('position')
    @classmethod
    def position_nonempty(cls, v: str) -> str:
        return v.strip() or UNKNOWN_POSITION


class Rumor(BaseModel):
    """One roster-change report, nested shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    status: str
    source: Entity
    player: Entity
    from_: Side = Field(alias='from')
    to: Side

    def flatten(self) -> 'FlatRumor':
        """Project onto the flat column layout."""
        return FlatRumor(
            date=self.date,
            status=self.status,
            source=self.source.name,
            source_url=self.source.url,
            player=self.player.name,
            player_url=self.player.url,
            from_region=self.from_.region,
            from_team=self.from_.team.name,
            from_team_image=self.from_.team.image,
            from_position=self.from_.position,
            to_region=self.to.region,
            to_team=self.to.team.name,
            to_team_image=self.to.team.image,
            to_position=self.to.position,
        )

    def to_record(self, shape: str = 'nested') -> dict:
        """JSON-ready dict in the requested shape."""
        if shape == 'flat':
            return self.flatten().model_dump()
        if shape != 'nested':
            raise ValueError(f'Unknown record shape: {shape}')
        return self.model_dump(by_alias=True)


class FlatRumor(BaseModel):
    """One roster-change report, one scalar per column."""

    model_config = ConfigDict(frozen=True)

    date: str
    status: str
    source: str
    source_url: str
    player: str
    player_url: str
    from_region: str
    from_team: str
    from_team_image: str
    from_position: str
    to_region: str
    to_team: str
    to_team_image: str
    to_position: str


class FeedItem(BaseModel):
    """RSS-ready projection of a Rumor."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    link: str = ''
    guid: str
    pub_date: datetime | None = None
    categories: tuple[str, ...] = ()
