"""Project models and the name <-> id index."""

from collections.abc import Iterable, Iterator

from ..core.errors import ProjectNotFoundError
from ..core.logging import get_logger
from .base import WireModel

logger = get_logger(__name__)

# Зарезервированное имя для inbox проекта
INBOX_ALIAS = "inbox"


class ProjectGroup(WireModel):
    """Project folder. Informational only."""

    id: str
    name: str = ""


class ProjectProfile(WireModel):
    """Project as listed in the sync payload."""

    id: str
    name: str = ""
    group_id: str | None = None
    closed: bool | None = None


class ProjectIndex:
    """
    Bidirectional mapping between project names and server ids.

    Invariants:
    - "inbox" всегда указывает на inbox_id, и обратная запись тоже есть
    - индекс строится целиком (build), никогда не патчится

    Пример:
        index = ProjectIndex.build("inbox123", [ProjectProfile(id="p1", name="Work")])
        index.resolve("Work")       # "p1"
        index.resolve_name("p1")    # "Work"
        index.resolve_name("zzz")   # ""
    """

    def __init__(
        self,
        name_to_id: dict[str, str] | None = None,
        id_to_name: dict[str, str] | None = None,
    ):
        self._name_to_id: dict[str, str] = dict(name_to_id or {})
        self._id_to_name: dict[str, str] = dict(id_to_name or {})

    @classmethod
    def build(cls, inbox_id: str, profiles: Iterable[ProjectProfile]) -> "ProjectIndex":
        """
        Build a fresh index from the inbox id and the server project list.

        The inbox alias is seeded first so a server project literally named
        "inbox" cannot take it over.
        """
        name_to_id = {INBOX_ALIAS: inbox_id}
        id_to_name = {inbox_id: INBOX_ALIAS}

        for profile in profiles:
            if profile.name == INBOX_ALIAS:
                logger.warning(
                    "Project named like the inbox alias skipped",
                    extra={"project_id": profile.id},
                )
                continue
            name_to_id[profile.name] = profile.id
            id_to_name[profile.id] = profile.name

        return cls(name_to_id, id_to_name)

    @property
    def inbox_id(self) -> str:
        return self._name_to_id.get(INBOX_ALIAS, "")

    def get_id(self, name: str) -> str | None:
        """Return the id for a project name or None."""
        return self._name_to_id.get(name)

    def resolve(self, name: str) -> str:
        """
        Resolve a project name to its id.

        Raises:
            ProjectNotFoundError: If the name is unknown
        """
        project_id = self._name_to_id.get(name)
        if project_id is None:
            raise ProjectNotFoundError(name)
        return project_id

    def resolve_name(self, project_id: str) -> str:
        """Resolve an id to its name; unknown ids give ""."""
        return self._id_to_name.get(project_id, "")

    def names(self) -> list[str]:
        return list(self._name_to_id)

    def __contains__(self, name: object) -> bool:
        return name in self._name_to_id

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._name_to_id.items())

    def __len__(self) -> int:
        return len(self._name_to_id)

    def __repr__(self) -> str:
        return f"<ProjectIndex(projects={len(self)}, inbox_id='{self.inbox_id}')>"
