from petstore.utils.util import role_required
