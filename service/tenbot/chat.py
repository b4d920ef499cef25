from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# Snapshots returned to callers

class ChatMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    alias: Optional[str] = None
    name: Optional[str] = None


class ChatInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    chat_id: str
    name: Optional[str] = None
    members: list[ChatMember] = Field(default_factory=list)


# Raw platform response

class ChatMemberResponse(BaseModel):
    userid: str
    alias: Optional[str] = None
    name: Optional[str] = None


class ChatInfoResponse(BaseModel):
    errcode: int
    errmsg: Optional[str] = None
    chatid: str = ""
    name: Optional[str] = None
    members: list[ChatMemberResponse] = Field(default_factory=list)

    def to_chat_info(self) -> ChatInfo:
        return ChatInfo(
            chat_id=self.chatid,
            name=self.name,
            members=[
                ChatMember(user_id=m.userid, alias=m.alias, name=m.name)
                for m in self.members
            ],
        )
