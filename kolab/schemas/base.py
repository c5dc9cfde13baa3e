from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Schema dasar. Dibaca langsung dari model ORM oleh API, dan dipakai ulang
    oleh client sync yang mengubah status baca secara lokal sehingga setiap
    assignment tetap divalidasi.
    """

    model_config = ConfigDict(from_attributes=True, validate_assignment=True)
