import logging
from typing import List


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Table(Chunk):
            count   = fields.StructField('I')
            entries = fields.ArrayField(Entry, n=Dependency('.count'))

    and have the number of elements of the field named 'entries' strictly
    connected to the field named 'count': while unpacking the count drives how
    many elements are read, while packing the count is written back from the
    actual number of elements.

    The expression is inspired from relative module resolution: the leading
    '.' stands for the father of the field holding the dependency, then each
    component is the name of a sub-field.
    '''
    def __init__(self, expression):
        if not expression.startswith('.'):
            raise ValueError(f"the expression '{expression}' must be relative, i.e. start with '.'")

        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug("trying to resolve '%s' for %s", self.expression, instance.__class__.__name__)

        # '.count'.split(".") -> ['', 'count']
        fields_path: List[str] = self.expression.split('.')[1:]

        if instance.father is None:
            raise AttributeError(f"relative dependency '{self.expression}' needs a father")

        field = instance.father
        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug(' resolved as field %s', field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value
        self.logger.debug(' resolved with value %s', value)

        return value

    def resolve_and_set(self, instance, value):
        '''The reverse of resolve(): used while packing to write back the
        derived value into the field the expression points to.'''
        field = self.resolve_field(instance)
        if not hasattr(field, 'value'):
            raise ValueError('something is wrong with the Dependency resolution!')
        field.value = value
