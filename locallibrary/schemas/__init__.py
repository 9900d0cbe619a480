from .validation import FieldError, FormValidationError, normalize_list, validate_form
from .author import AuthorForm
from .genre import GenreForm, GenreUpdateForm
from .book import BookForm
from .book_instance import BookInstanceForm

__all__ = [
    "AuthorForm",
    "BookForm",
    "BookInstanceForm",
    "FieldError",
    "FormValidationError",
    "GenreForm",
    "GenreUpdateForm",
    "normalize_list",
    "validate_form",
]
