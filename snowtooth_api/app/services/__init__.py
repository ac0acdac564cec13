"""
Service layer abstraction.

Each service encapsulates the logic behind one group of operations:
``QueryService`` for reads, ``StatusService`` for status mutations
and the notifications they trigger, and ``access`` for resolving the
cross-references between lifts and trails.  Services receive the
shared ``ResortContext`` explicitly instead of reaching for globals.
"""
