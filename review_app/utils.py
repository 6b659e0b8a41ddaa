from rest_framework import serializers


class LabelChoiceField(serializers.ChoiceField):
    """Accepts a choice key or its label (any case); returns the key."""
    def to_internal_value(self, data):
        data_str = str(data)
        if data_str in self.choices:
            return data_str
        for key, label in self.choices.items():
            if str(label).lower() == data_str.lower():
                return key
        self.fail('invalid_choice', input=data)


def language_param(request, lang=None):
    """Explicit lang, then ?lang=, then the user's preferred language."""
    return (
        lang
        or request.query_params.get("lang")
        or getattr(request.user, "preferred_language", None)
    )
