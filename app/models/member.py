"""회원/팀 관련 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
A team has many members; a member belongs to at most one team.

Tables:
    - teams: 팀 (Teams)
    - members: 회원, 팀 FK는 선택 (Members, team FK optional)
"""

from typing import Any

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델 — 회원 목록의 역참조만 보유.

    Team model. Holds a back-reference collection of members only;
    the team does not control member lifecycle (deleting a team
    detaches its members instead of deleting them).

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members assigned to this team)
    """

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"


class Member(Base):
    """회원 모델.

    Member model. The team reference is changed only through
    :meth:`change_team`, which keeps ``team.members`` in sync.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        username: 사용자명 (Username, nullable)
        age: 나이 (Age, defaults to 0)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Assigned team, optional)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 팀 삭제 시 회원은 남고 FK만 NULL 처리 (Team deletion detaches, never deletes, members)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team = relationship("Team", back_populates="members")

    def __init__(
        self,
        username: str | None = None,
        age: int = 0,
        team: "Team | None" = None,
        **kwargs: Any,
    ) -> None:
        # 나머지 매핑 컬럼(id, team_id 등)은 그대로 전달 (Other mapped columns pass through)
        super().__init__(username=username, age=age, **kwargs)
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경하고 팀의 회원 목록에 등록합니다.

        Assign this member to ``team``. Setting the relationship fires the
        ``back_populates`` event, which appends the member to ``team.members``
        (and removes it from the previous team's collection) in the same step.
        The collection is never touched directly. Inside an async session, go
        through ``MemberRepository.assign_team``, which loads both collections
        before calling this.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
