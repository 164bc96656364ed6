"""
The ways a binding can go wrong. The binder is the one place that raises
these: the registry and catalog just come back empty-handed, and the binder
decides what that emptiness means.
"""

class BindingError(Exception):
	""" The first argument is a human-readable explanation. """
	pass

class NoSuchMember(BindingError):
	""" The name matches nothing the type offers. """

class NoSuchOverload(BindingError):
	""" The name matches a family of members, but none of them fits the arguments. """

class AmbiguousBinding(BindingError):
	""" A nested type which needs an enclosing instance was asked for from a bare type. """

class InvocationFailure(BindingError):
	"""
	The underlying call or construction blew up. The original
	exception is chained as `__cause__`.
	"""

class NotImported(BindingError):
	""" A simple name was used which no import has brought in. """
