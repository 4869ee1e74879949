"""
Data models for the bet tracker
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class BetRecord:
    """One user-submitted or extracted wager annotation."""
    id: str
    user_key: str
    event: str
    market: str
    odds: str
    created_at: int
    units: float = 0
    sport_tag: Optional[str] = None
    result: Optional[str] = None
    clv: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            **self.extra,
            'id': self.id,
            'userKey': self.user_key,
            'event': self.event,
            'market': self.market,
            'odds': self.odds,
            'units': self.units,
            'createdAt': self.created_at,
        }
        if self.sport_tag is not None:
            data['sportTag'] = self.sport_tag
        if self.result is not None:
            data['result'] = self.result
        if self.clv is not None:
            data['clv'] = self.clv
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BetRecord':
        """Rebuild a record from its wire/stored form, keeping unknown keys."""
        known = {'id', 'userKey', 'event', 'market', 'odds', 'units',
                 'sportTag', 'result', 'clv', 'createdAt'}
        return cls(
            id=str(data['id']),
            user_key=str(data.get('userKey', '')),
            event=data.get('event', ''),
            market=data.get('market', ''),
            odds=data.get('odds', ''),
            created_at=int(data.get('createdAt', 0)),
            units=data.get('units', 0) or 0,
            sport_tag=data.get('sportTag'),
            result=data.get('result'),
            clv=data.get('clv'),
            extra={k: v for k, v in data.items() if k not in known},
        )
