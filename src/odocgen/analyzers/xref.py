"""Cross-reference index: which model owns a field or method name."""

from collections.abc import Mapping

from odocgen.models.aggregate import AggregateModel, CrossReferenceEntry, CrossReferenceIndex


def build_cross_reference(models: Mapping[str, AggregateModel]) -> CrossReferenceIndex:
    """Build the global field/method index.

    Models are visited by name. Within a model, names from the original
    fragment are emitted first as original; extension fragments follow in
    ascending file order and only emit names the original does not declare.
    The name-keyed maps keep the last emitted entry.

    Args:
        models: Model name -> aggregate (extensions already sorted)

    Returns:
        CrossReferenceIndex
    """
    index = CrossReferenceIndex()

    for name in sorted(models):
        model = models[name]
        original_methods: set[str] = set()
        original_fields: set[str] = set()

        if model.original is not None:
            original_methods = set(model.original.methods)
            original_fields = set(model.original.fields)
            entry = CrossReferenceEntry(model=name, is_original=True)
            for method in sorted(original_methods):
                index.add_method(method, entry)
            for field_name in sorted(original_fields):
                index.add_field(field_name, entry)

        inherited = CrossReferenceEntry(model=name, is_original=False)
        for fragment in model.extensions:
            for method in sorted(fragment.methods):
                if method not in original_methods:
                    index.add_method(method, inherited)
            for field_name in sorted(fragment.fields):
                if field_name not in original_fields:
                    index.add_field(field_name, inherited)

    return index
