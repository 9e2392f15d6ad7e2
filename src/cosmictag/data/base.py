"""Module with a parent class of all data structures."""

from dataclasses import asdict, dataclass

import numpy as np


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Defines basic methods shared by all data structures.
    """

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Attributes specifying coordinates
    _pos_attrs = ()

    # Enumerated attributes as (key, enum class) pairs
    _enum_attrs = ()

    # Attributes that must never be stored to file
    _skip_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Immediately called after building the class attributes.

        Gives default values to array-like attributes. If a default value was
        provided in the attribute definition, all instances of this class
        would point to the same memory location. Also casts array-like
        attributes provided as lists to numpy arrays.
        """
        for attr, size in self._fixed_length_attrs:
            if not isinstance(size, tuple):
                dtype = np.float64
            else:
                size, dtype = size

            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, np.full(size, -np.inf, dtype=dtype))
            else:
                setattr(self, attr, np.asarray(value, dtype=dtype))

        # Cast enumerated attributes to their enumerator
        for attr, enum in self._enum_attrs:
            setattr(self, attr, enum(getattr(self, attr)))

    def __eq__(self, other):
        """Checks that all attributes of two class instances are the same.

        This overloads the default dataclass `__eq__` method to include an
        appopriate check for vector (numpy) attributes.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for k, v in self.__dict__.items():
            v_other = getattr(other, k)
            if isinstance(v, np.ndarray):
                if v.shape != v_other.shape or (v_other != v).any():
                    return False
            elif v != v_other:
                return False

        return True

    @property
    def fixed_length_attrs(self):
        """Dictionary which maps fixed-length attributes onto their length."""
        return dict(self._fixed_length_attrs)

    def as_dict(self):
        """Returns the data class as dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return {k: v for k, v in asdict(self).items() if k not in self._skip_attrs}

    def scalar_dict(self, attrs=None):
        """Returns the data class attributes as a dictionary of scalars.

        This is useful when storing data classes in CSV files, which expect
        a single scalar per column in the table.

        Parameters
        ----------
        attrs : List[str], optional
            List of attribute names to include in the dictionary. If not
            specified, all the keys are included.

        Returns
        -------
        dict
            Dictionary of scalar attribute values
        """
        scalar_dict, found = {}, []
        enum_attrs = dict(self._enum_attrs)
        for attr, value in self.as_dict().items():
            # If the attribute is not requested, skip
            if attrs is not None and attr not in attrs:
                continue
            found.append(attr)

            # Dispatch
            if attr in enum_attrs:
                # Store enumerated attributes by their label
                scalar_dict[attr] = enum_attrs[attr](value).label

            elif np.isscalar(value):
                scalar_dict[attr] = value

            elif attr in self._pos_attrs:
                # If the attribute is a position, expand with axis
                for i, v in enumerate(value):
                    scalar_dict[f"{attr}_{self._axes[i]}"] = v

            elif attr in self.fixed_length_attrs:
                # If the attribute is a fixed-length array, expand with index
                for i, v in enumerate(np.asarray(value).flatten()):
                    scalar_dict[f"{attr}_{i}"] = v

            else:
                raise ValueError(
                    f"Cannot expand the `{attr}` attribute of "
                    f"`{self.__class__.__name__}` to scalar values."
                )

        if attrs is not None and len(attrs) != len(found):
            class_name = self.__class__.__name__
            miss = list(set(attrs).difference(set(found)))
            raise AttributeError(
                f"Attribute(s) {miss} do(es) not appear in {class_name}."
            )

        return scalar_dict
