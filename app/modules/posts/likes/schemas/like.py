from pydantic import BaseModel, ConfigDict

class Like(BaseModel):
    """A user's like on a post; the user id is its only identity"""
    user_id: str

    model_config = ConfigDict(frozen=True)
