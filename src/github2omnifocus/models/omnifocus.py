"""OmniFocus task models exchanged with the JXA scripts."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OmnifocusTask(BaseModel):
    """A task that exists in OmniFocus."""

    id: str
    name: str
    completed: bool = False
    tags: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Key of the GitHub item this task mirrors.

        Task names are written as "<key> <title>", so the key is everything
        before the first space. A name without a space is its own key.
        """
        return self.name.partition(" ")[0]

    def __str__(self) -> str:
        return f"OmnifocusTask: [{self.key}] {self.name}"


class TaskQuery(BaseModel):
    """Query for incomplete tasks in a project carrying all of the given tags."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_name: str
    tags: list[str] = Field(default_factory=list)


class NewOmnifocusTask(BaseModel):
    """Request to create a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_name: str
    name: str
    tags: list[str] = Field(default_factory=list)
    note: str = ""
    due_date_ms: int = Field(default=0, alias="dueDateMS")  # 0 means no due date
