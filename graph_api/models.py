from typing import List, Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    profile_picture_url: Optional[str] = None
    followers_count: Optional[int] = None
    follows_count: Optional[int] = None
    media_count: Optional[int] = None


class Post(BaseModel):
    id: str
    caption: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = Field(None, description="Upstream value, e.g. IMAGE, VIDEO, CAROUSEL_ALBUM")
    timestamp: Optional[str] = Field(None, description="ISO-8601")
    like_count: Optional[int] = None
    comments_count: Optional[int] = None
    permalink: Optional[str] = None


class ResolvedAccount(BaseModel):
    account_id: str
    access_token: str  # page-scoped, not the caller's credential
    profile: Profile


class BusinessPostsResponse(BaseModel):
    success: bool = True
    username: str
    account_type: str = "business"
    profile: Profile
    posts: List[Post]


# --- public scrape ---

class PublicProfile(BaseModel):
    id: Optional[str] = None
    username: str
    full_name: Optional[str] = None
    profile_pic_url: Optional[str] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    posts_count: Optional[int] = None


class PublicPost(BaseModel):
    id: str
    shortcode: Optional[str] = None
    display_url: Optional[str] = None
    caption: Optional[str] = None
    taken_at_timestamp: Optional[int] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None


class PublicPostsResponse(BaseModel):
    success: bool = True
    username: str
    method: str = "web_scraping"
    profile: PublicProfile
    posts: List[PublicPost]


# --- auth ---

class AuthUrlResponse(BaseModel):
    success: bool = True
    auth_url: str
    instructions: List[str]


class TokenExchangeRequest(BaseModel):
    code: Optional[str] = None
    app_id: Optional[str] = None
    app_secret: Optional[str] = None
    redirect_uri: Optional[str] = None


class TokenExchangeResponse(BaseModel):
    success: bool = True
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
