from wtforms import Form, StringField
from wtforms.validators import DataRequired, Length, StopValidation


def is_string(form, field):
    if not isinstance(field.data, str):
        raise StopValidation("'comicId' must be a string")


class VoteForm(Form):
    """JSON body of POST /api/vote. Built from ``data=``, not form data."""
    comicId = StringField('comicId', validators=[
        DataRequired(message="Missing 'comicId' in request body"),
        is_string,
        Length(max=64, message="'comicId' is too long"),
    ])

    def __init__(self, payload=None, **kwargs):
        self.payload = payload if isinstance(payload, dict) else None
        super().__init__(data=self.payload or {}, **kwargs)

    def validate(self, extra_validators=None):
        if self.payload is None:
            self.form_errors.append('Invalid JSON body')
            return False
        unknown = sorted(set(self.payload) - set(self._fields))
        if unknown:
            self.form_errors.append(f"Unknown field(s): {', '.join(unknown)}")
            return False
        return super().validate(extra_validators=extra_validators)

    def first_error(self):
        if self.form_errors:
            return self.form_errors[0]
        for errors in self.errors.values():
            if errors:
                return errors[0]
        return 'Invalid request body'
