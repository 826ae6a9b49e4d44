"""
Pydantic models for request/response validation
"""
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


NodeIdModel = Union[int, str]


class UserUpdate(BaseModel):
    """User rename model"""
    name: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(extra="forbid")

    @field_validator('name')
    def name_non_blank(cls, v: str) -> str:
        if v.strip() == "":
            raise ValueError("name must be a non-empty string")
        return v.strip()


class UserCreate(UserUpdate):
    """User creation model"""
    id: Optional[NodeIdModel] = None

    model_config = ConfigDict(extra="ignore")


class UserResponse(BaseModel):
    """User response model"""
    id: NodeIdModel
    name: str


class FriendshipRequest(BaseModel):
    """Friendship add/remove model"""
    source: NodeIdModel
    target: NodeIdModel


class FriendshipResponse(BaseModel):
    """Friendship response model"""
    source: NodeIdModel
    target: NodeIdModel


class GraphPayload(BaseModel):
    """Whole-graph document used by import and /graph"""
    users: List[UserResponse] = Field(default_factory=list)
    friendships: List[FriendshipResponse] = Field(default_factory=list)


class StatsResponse(BaseModel):
    """Graph statistics"""
    total_users: int
    total_friendships: int
    total_communities: int


class PathResponse(BaseModel):
    """Shortest path query result"""
    start: NodeIdModel
    end: NodeIdModel
    found: bool
    path: List[NodeIdModel] = Field(default_factory=list)
    distance: int = -1


class CommunityResponse(BaseModel):
    """One connected community"""
    id: int
    users: List[NodeIdModel]
    color: str


class CommunitiesResponse(BaseModel):
    """Community detection result"""
    method: str
    count: int
    communities: List[CommunityResponse]


class SuggestionResponse(BaseModel):
    """One friend suggestion"""
    user_id: NodeIdModel
    mutual_count: int
    mutual_friends: List[NodeIdModel]


class SuggestionsResponse(BaseModel):
    """Friend suggestions for a user"""
    user_id: NodeIdModel
    suggestions: List[SuggestionResponse]


class MessageResponse(BaseModel):
    """Generic acknowledgement"""
    message: str
    success: bool = True
