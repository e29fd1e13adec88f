# Schemas package

from .achievements import (
    AchievementProgressResponse,
    AchievementDefinitionOut,
    BadgeDefinitionOut,
    CatalogResponse,
)

from .activity import CommentCreateRequest
