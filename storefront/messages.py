"""Shopper-facing notification texts."""

GENERIC_RETRY = "حدث خطأ، حاول مرة أخرى"
SESSION_EXPIRED = "انتهت جلستك، يرجى تسجيل الدخول مرة أخرى"

WISHLIST_ADDED = "تمت الإضافة للمفضلة ❤️"
WISHLIST_REMOVED = "تمت الإزالة من المفضلة"

COUPON_CODE_REQUIRED = "أدخل كود الخصم"
COUPON_INVALID = "كود الخصم غير صالح"
COUPON_APPLIED = "تم تطبيق الخصم: {formatted_discount} 🎉"
COUPON_REMOVED = "تم إزالة كود الخصم"

ORDER_CREATE_FAILED = "فشل في إنشاء الطلب"
CHECKOUT_FAILED = "حدث خطأ أثناء إتمام الطلب"
CHECKOUT_SUCCEEDED = "تم إتمام الطلب بنجاح! 🎉"

LOGIN_PATH = "/login"
CART_PATH = "/cart"
ORDER_SUCCESS_PATH = "/dashboard?order_success=true"
