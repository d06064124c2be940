from pydantic import BaseModel, ValidationError, field_validator

from cms.domains.validation import first_violation, validate_document_name


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        validate_document_name(v)
        return v

    @classmethod
    def parse(cls, name: str) -> "DocumentCreate":
        """Проверка формы, поднимает первое нарушенное правило"""
        try:
            return cls(name=name)
        except ValidationError as e:
            raise first_violation(e) from None
