from enum import Enum
from typing import List

from .common import FrozenCamelModel


class TopicId(str, Enum):
    window_functions = "window_functions"
    subqueries = "subqueries"
    normalization = "normalization"
    data_modeling = "data_modeling"


class TopicIcon(str, Enum):
    layers = "Layers"
    git_merge = "GitMerge"
    database = "Database"
    list_tree = "ListTree"


class Topic(FrozenCamelModel):
    id: TopicId
    title: str
    description: str
    key_concepts: List[str]
    icon: TopicIcon
