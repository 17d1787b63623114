"""Shared enums for models."""

from enum import Enum


class ProjectCategory(str, Enum):
    """Art or creative category a project belongs to."""

    PAINTING = "PAINTING"
    DRAWING = "DRAWING"
    SCULPTURE = "SCULPTURE"
    PHOTOGRAPHY = "PHOTOGRAPHY"
    ILLUSTRATION = "ILLUSTRATION"
    CRAFT = "CRAFT"
    DESIGN = "DESIGN"
    MEDIA_ART = "MEDIA_ART"
    MUSIC = "MUSIC"
    FILM = "FILM"
    PERFORMANCE = "PERFORMANCE"
    LITERATURE = "LITERATURE"
    OTHER = "OTHER"


class RequiredCategory(str, Enum):
    """Creator role a project is recruiting for."""

    PAINTER = "PAINTER"
    ILLUSTRATOR = "ILLUSTRATOR"
    SCULPTOR = "SCULPTOR"
    PHOTOGRAPHER = "PHOTOGRAPHER"
    DESIGNER = "DESIGNER"
    CRAFTER = "CRAFTER"
    VIDEOGRAPHER = "VIDEOGRAPHER"
    MUSICIAN = "MUSICIAN"
    ACTOR = "ACTOR"
    DANCER = "DANCER"
    WRITER = "WRITER"
    DEVELOPER = "DEVELOPER"
    PLANNER = "PLANNER"
    OTHER = "OTHER"


class RemoteStatus(str, Enum):
    """Where project work happens."""

    REMOTE = "remote"
    ONSITE = "onsite"
    BOTH = "both"
