from typing import Dict


DEFAULT_LANGUAGE = "en"

EN = {
    "marketplace": {
        "hero": {
            "title": "Discover Amazing Products",
            "subtitle": "Connect with local vendors and find unique products at the best prices",
            "shopNow": "Shop Now",
            "becomeVendor": "Become a Vendor",
        },
        "stats": {"products": "Products", "vendors": "Vendors"},
        "sections": {
            "popularVendors": "Popular Vendors",
            "verifiedVendors": "Trusted and verified businesses",
            "featuredProducts": "Featured Products",
            "latestProducts": "Latest additions to our marketplace",
        },
        "actions": {"viewAllProducts": "View All Products"},
    },
    "common": {
        "whatsapp_order": "WhatsApp Order",
        "login": "Login",
        "register": "Register",
        "cart": "Cart",
        "search": "Search",
        "language": "Language",
        "currency": "TSh",
        "add_to_cart": "Add to Cart",
        "buy_now": "Buy Now",
        "price": "Price",
        "quantity": "Quantity",
        "total": "Total",
        "checkout": "Checkout",
        "phone": "Phone Number",
        "email": "Email",
        "password": "Password",
        "name": "Name",
        "business_name": "Business Name",
        "category": "Category",
        "submit": "Submit",
        "cancel": "Cancel",
        "delete": "Delete",
        "admin": "Admin",
        "vendor": "Vendor",
        "customer": "Customer",
        "dashboard": "Dashboard",
        "products": "Products",
        "orders": "Orders",
        "messages": "Messages",
        "verified": "Verified",
        "pending": "Pending",
        "status": "Status",
        "customer_information": "Customer Information",
        "delivery_address": "Delivery Address / street",
        "order_summary": "Order Summary",
        "your_cart_is_empty": "Your cart is empty",
        "continue_shopping": "Continue Shopping",
        "campus_marketplace": "Campus Marketplace",
        "no_products_found": "No products found",
        "try_adjusting_search": "Try adjusting your search terms",
        "load_more_products": "Load More Products",
        "sort_by": "Sort by",
        "newest": "Newest",
        "price_low_high": "Price: Low to High",
        "price_high_low": "Price: High to Low",
        "highest_rated": "Highest Rated",
        "filters": "Filters",
        "search_products": "Search products...",
        "confirm_password": "Confirm Password",
        "welcome_back": "Welcome back! Please sign in to your account",
        "vendor_registration": "Vendor Registration",
        "assistant": "Assistant",
        "typeMessage": "Type your message...",
        "trainBot": "Train Bot",
        "exitTraining": "Exit Training",
    },
    "login": {"forgot_password": "Forgot password?", "remember_me": "remember me"},
    "navigation": {"back": "Back", "about": "About", "products": "products"},
    "vendor": {
        "verified": "Verified Seller",
        "pending": "Pending Verification",
        "active": "Active",
        "inactive": "Inactive",
        "joined": "Joined",
        "noDescription": "No description provided",
        "availableProducts": "Available Products",
        "noProducts": "No products available yet",
        "noVerifiedVendors": "No verified vendors available",
    },
    "categories": {
        "all": "All Categories",
        "electronics": "Electronics",
        "clothing": "Clothing",
        "home": "Home & Garden",
        "sports": "Sports",
        "books": "Books",
        "beauty": "Beauty",
        "toys": "Toys & Games",
        "food": "Food & Beverages",
        "health": "Health",
        "tools": "Tools",
        "other": "Other",
    },
    "forgot_password": {
        "title": "Reset your password",
        "email_label": "Email address",
        "submit": "Send reset link",
        "success_message": "We’ve sent a password reset email!",
        "error_message": "Failed to send reset email. Please try again.",
        "instructions": "We will send you a link to reset your password.",
        "check_spam_note": "If it’s not in your inbox, be sure to check your spam folder.",
    },
}

SW = {
    "marketplace": {
        "hero": {
            "title": "Gundua Bidhaa za Kipekee",
            "subtitle": "Unganishwa na wachuuzi wa mitaani na upate bidhaa za kipekee kwa bei nzuri",
            "shopNow": "Nunua Sasa",
            "becomeVendor": "Kuwa Mchuuzi",
        },
        "stats": {"products": "Bidhaa", "vendors": "Wachuuzi"},
        "sections": {
            "popularVendors": "Wachuuzi Maarufu",
            "verifiedVendors": "Biashara zilizothibitishwa na kuaminika",
            "featuredProducts": "Bidhaa Maalum",
            "latestProducts": "Bidhaa mpya kwenye soko letu",
        },
        "actions": {"viewAllProducts": "Ona Bidhaa Zote"},
    },
    "common": {
        "whatsapp_order": "WhatsApp Order",
        "login": "Ingia",
        "register": "Jisajili",
        "cart": "Mkoba",
        "search": "Tafuta",
        "language": "Lugha",
        "currency": "TSh",
        "add_to_cart": "Weka Mkobani",
        "buy_now": "Nunua Sasa",
        "price": "Bei",
        "quantity": "Idadi",
        "total": "Jumla",
        "checkout": "Maliza Ununuzi",
        "phone": "Nambari ya Simu",
        "email": "Barua Pepe",
        "password": "Nenosiri",
        "name": "Jina",
        "business_name": "Jina la Biashara",
        "category": "Aina",
        "submit": "Wasilisha",
        "cancel": "Ghairi",
        "delete": "Futa",
        "admin": "Msimamizi",
        "vendor": "Mchuuzi",
        "customer": "Mteja",
        "dashboard": "Dashibodi",
        "products": "Bidhaa",
        "orders": "Maagizo",
        "messages": "Ujumbe",
        "verified": "Imethibitishwa",
        "pending": "Inasubiri",
        "status": "Hali",
        "customer_information": "Taarifa za Mteja",
        "delivery_address": "Anwani ya Uwasilishaji / Mtaa",
        "order_summary": "Muhtasari wa Agizo",
        "your_cart_is_empty": "Mkoba wako hauna kitu",
        "continue_shopping": "Endelea Kununua",
        "campus_marketplace": "Soko la Chuo Kikuu",
        "no_products_found": "Hakuna bidhaa zilizopatikana",
        "try_adjusting_search": "Jaribu kubadilisha maneno ya utafutaji",
        "load_more_products": "Pakia Bidhaa Zaidi",
        "sort_by": "Panga kwa",
        "newest": "Mpya zaidi",
        "price_low_high": "Bei: Chini hadi Juu",
        "price_high_low": "Bei: Juu hadi Chini",
        "highest_rated": "Zilizo na Ukadiriaji wa Juu",
        "filters": "Vichujio",
        "search_products": "Tafuta bidhaa...",
        "confirm_password": "Thibitisha Nenosiri",
        "welcome_back": "Karibu tena! Tafadhali ingia kwenye akaunti yako",
        "vendor_registration": "Usajili wa Mchuuzi",
        "assistant": "Msaidizi",
        "typeMessage": "Andika ujumbe wako...",
        "trainBot": "Fundisha Bot",
        "exitTraining": "Toka Mafunzo",
    },
    "login": {"forgot_password": "Umesahau nywila?", "remember_me": "nikumbuke"},
    "navigation": {"back": "Rudi", "about": "kuhusu", "products": "bidhaa"},
    "vendor": {
        "verified": "Imethibitishwa",
        "pending": "Inasubiri",
        "active": "Hai",
        "inactive": "Haifanyi kazi",
        "joined": "Alijiunga",
        "noDescription": "Hakuna maelezo yaliyotolewa",
        "availableProducts": "Bidhaa Zilizopo",
        "noProducts": "Hakuna bidhaa zilizopo bado",
        "noVerifiedVendors": "Hakuna wauzaji waliothibitishwa waliopo",
    },
    "categories": {
        "all": "Kategoria Zote",
        "electronics": "Elektroniki",
        "clothing": "Mavazi",
        "home": "Nyumba",
        "sports": "Michezo",
        "books": "Vitabu",
        "beauty": "Urembo",
        "toys": "Vichezo",
        "food": "Chakula & Vinywaji",
        "health": "Afya",
        "tools": "Vifaa",
        "other": "Nyingine",
    },
    "forgot_password": {
        "title": "Weka upya nywila yako",
        "email_label": "Anuani ya barua pepe",
        "submit": "Tuma kiungo cha kuweka upya",
        "success_message": "Barua pepe ya kuweka upya nenosiri imetumwa!",
        "error_message": "Imeshindwa kutuma barua pepe ya kuweka upya. Tafadhali jaribu tena.",
        "instructions": "Tutakutumia kiungo cha kuweka upya nywila yako.",
        "check_spam_note": "Tafadhali angalia folda ya barua taka ikiwa huioni kwenye kikasha chako.",
    },
}


def flatten(messages: Dict, prefix: str = "") -> Dict[str, str]:
    # {"common": {"cart": "Cart"}} -> {"common.cart": "Cart"}
    flat = {}
    for key, value in messages.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, f"{path}."))
        else:
            flat[path] = value
    return flat


MESSAGES: Dict[str, Dict[str, str]] = {"en": flatten(EN), "sw": flatten(SW)}
SUPPORTED_LANGUAGES = tuple(MESSAGES)


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    # unknown keys come back unchanged
    value = MESSAGES.get(language, {}).get(key)
    return value or key
